"""
Agora Backend — Services Layer
================================

What:  Business logic between routes (HTTP) and repositories (persistence).
How:   Services are stateless singletons; every method receives the
       request's AsyncSession and builds the repositories it needs.

Service Inventory:
    - CredentialManager: password hashing (passlib/bcrypt) and JWTs (PyJWT)
    - authorization:     identity and ownership checks
    - pagination:        PageRequest and page metadata
    - AuthService:       accounts, login, profile, password, deletion
    - PostService:       posts with author summary and derived counts
    - CommentService:    comments on posts
    - LikeService:       likes, one per (user, post)
"""
