"""
Agora Backend — Application Package
=====================================

Layers, top to bottom:

    ┌─────────────────────────────────────┐
    │   Routes + dependencies (HTTP)      │  ← envelope, status codes, auth header
    ├─────────────────────────────────────┤
    │   Services (business rules)         │  ← ownership, conflicts, counts
    ├─────────────────────────────────────┤
    │   Repositories (queries)            │  ← explicit joins, cascades
    ├─────────────────────────────────────┤
    │   Models & Schemas (data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (sessions)               │  ← async SQLAlchemy
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
