"""
Agora Backend — Repository Base
=================================

What:  Shared plumbing for the per-entity repositories.
How:   Every repository is constructed with the request's AsyncSession and
       routes its statements through `_execute` / `_flush`, which translate
       SQLAlchemy failures into application exceptions:
           IntegrityError (unique / FK)  → ConflictError (400)
           any other SQLAlchemyError     → DatabaseError (500, details logged)
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Holds the explicit session handle shared by all repositories."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, statement: Any):
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Query failed in %s: %s", type(self).__name__, str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

    async def _flush(self, conflict_message: str) -> None:
        """
        Flush pending changes, mapping constraint violations to ConflictError.

        The caller's pre-checks give friendly messages in the common case;
        this is what catches the race where two requests pass the pre-check
        at the same time.
        """
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.warning(
                "Constraint violation in %s: %s", type(self).__name__, str(e.orig)
            )
            raise ConflictError(
                message=conflict_message,
                context={"constraint_error": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Flush failed in %s: %s", type(self).__name__, str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

    async def _delete(self, instance: Any) -> None:
        await self.session.delete(instance)
        await self._flush(conflict_message="The record could not be deleted")
