"""
Agora Backend — Request Dependencies
======================================

What:  FastAPI dependencies that resolve the caller's identity from the
       `Authorization: Bearer <token>` header.
How:   HTTPBearer(auto_error=False) extracts the token without rejecting
       the request itself, so the 401 goes through the app's own error
       envelope instead of FastAPI's default 403 body.

    get_current_user   → required auth; raises UnauthorizedError (401)
    get_optional_user  → optional auth; any token problem means "anonymous"
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import UnauthorizedError
from app.models.user import User
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return await auth_service.authenticate(db, credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Optional[User]:
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await auth_service.authenticate(db, credentials.credentials)
    except UnauthorizedError as e:
        logger.debug("Optional auth ignored: %s", e.message)
        return None
