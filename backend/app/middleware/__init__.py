"""
Agora Backend — Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    - Rate limit runs first so rejected requests cost nothing downstream
    - Request ID is set before the access log line is written
    - The access log sees the final status code, including error envelopes
"""
