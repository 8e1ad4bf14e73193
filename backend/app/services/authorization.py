"""
Agora Backend — Authorization Policy
======================================

What:  Decides whether the acting identity may perform an operation.

Rules:
    - Writes to a Post or Comment require actor.id == resource.author_id,
      otherwise ForbiddenError (403).
    - Writes without an identity fail with UnauthorizedError (401) before
      any ownership check runs.
    - Likes are always created/removed for the actor's own id; there is no
      way to name another user, so no check beyond `require_identity`.
    - Reads are public; "liked by me" is only computed when an identity is
      present.
"""

import logging
from typing import Optional

from app.exceptions import ForbiddenError, UnauthorizedError
from app.models.user import User

logger = logging.getLogger(__name__)


def require_identity(actor: Optional[User]) -> User:
    if actor is None:
        raise UnauthorizedError()
    return actor


def ensure_owner(actor: Optional[User], author_id: int, resource: str, action: str) -> User:
    """
    Raise unless `actor` authored the resource.

    Args:
        actor:     the authenticated user (None for anonymous requests)
        author_id: the resource's `author_id`
        resource:  "post" / "comment", used in the error message
        action:    "update" / "delete", used in the error message
    """
    actor = require_identity(actor)
    if actor.id != author_id:
        logger.warning(
            "User %s denied %s on %s owned by %s", actor.id, action, resource, author_id
        )
        raise ForbiddenError(
            message=f"You are not authorized to {action} this {resource}",
            context={"actor_id": actor.id, "author_id": author_id},
        )
    return actor
