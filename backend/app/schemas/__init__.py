"""
Agora Backend — Pydantic Request/Response Schemas
===================================================

What:  The API contract. Every response is wrapped in
       {"success": bool, "message": str?, "data": {...}?, "errors": [...]?}
       and uses camelCase keys (fullName, createdAt, likesCount, ...).
Why:   ORM rows never reach the client directly, so fields such as the
       password hash cannot leak: a schema that does not declare a field
       cannot serialize it.
"""
