"""
Agora Backend — API Routes Package
====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - auth.py:      /api/auth/*       register, login, me, profile, password
    - posts.py:     /api/posts/*      feed, detail, per-user listing, CRUD
    - comments.py:  /api/comments/*   per-post listing, CRUD
    - likes.py:     /api/likes/*      like/unlike, per-post and per-user listing
    - health.py:    /, /health        service status

Routes stay thin: they validate parameters, resolve the caller through
app.dependencies, call one service method and wrap the result in the
ApiResponse envelope. Business rules live in app.services.
"""
