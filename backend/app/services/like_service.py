"""
Agora Backend — Like Service
==============================

What:  Like/unlike a post as the acting user, and list likes by post or
       by user.
Who:   Called by the /api/likes routes.

Contract:
    like_post    → ConflictError "You have already liked this post" on a repeat
    unlike_post  → ConflictError "You have not liked this post" when no like exists
    Both return the recomputed like count of the post on success, and leave
    the count untouched on failure.

Concurrency:
    Two simultaneous likes from the same user both pass the pre-check; the
    unique constraint on (user_id, post_id) rejects the second INSERT and
    LikeRepository reports it as the same ConflictError. No locks are taken.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError
from app.models.like import Like
from app.models.user import User
from app.repositories.like_repository import LikeRepository
from app.repositories.post_repository import PostRepository
from app.repositories.user_repository import UserRepository
from app.schemas.like import (
    LikeCountData,
    LikedPostResponse,
    LikeResponse,
    PostLikesData,
    UserLikesData,
)
from app.schemas.user import AuthorSummary
from app.services.authorization import require_identity
from app.services.pagination import PageRequest
from app.services.post_service import build_post_response

logger = logging.getLogger(__name__)


class LikeService:

    async def _ensure_post_exists(self, db: AsyncSession, post_id: int) -> None:
        if not await PostRepository(db).exists(post_id):
            raise NotFoundError(resource="Post", resource_id=post_id)

    async def like_post(
        self, db: AsyncSession, actor: Optional[User], post_id: int
    ) -> LikeCountData:
        actor = require_identity(actor)
        await self._ensure_post_exists(db, post_id)
        likes = LikeRepository(db)

        if await likes.get_for_user_and_post(actor.id, post_id) is not None:
            raise ConflictError(
                "You have already liked this post",
                context={"user_id": actor.id, "post_id": post_id},
            )

        await likes.add(Like(user_id=actor.id, post_id=post_id))
        count = await likes.count_for_post(post_id)
        logger.info("User %s liked post %s (likes=%d)", actor.id, post_id, count)
        return LikeCountData(likes_count=count)

    async def unlike_post(
        self, db: AsyncSession, actor: Optional[User], post_id: int
    ) -> LikeCountData:
        actor = require_identity(actor)
        await self._ensure_post_exists(db, post_id)
        likes = LikeRepository(db)

        like = await likes.get_for_user_and_post(actor.id, post_id)
        if like is None:
            raise ConflictError(
                "You have not liked this post",
                context={"user_id": actor.id, "post_id": post_id},
            )

        await likes.delete(like)
        count = await likes.count_for_post(post_id)
        logger.info("User %s unliked post %s (likes=%d)", actor.id, post_id, count)
        return LikeCountData(likes_count=count)

    async def list_post_likes(
        self, db: AsyncSession, post_id: int, page: PageRequest
    ) -> PostLikesData:
        await self._ensure_post_exists(db, post_id)
        likes = LikeRepository(db)

        total = await likes.count_for_post(post_id)
        rows = await likes.list_for_post_with_user(post_id, offset=page.offset, limit=page.limit)
        return PostLikesData(
            likes_count=total,
            likes=[
                LikeResponse(
                    id=like.id,
                    user_id=like.user_id,
                    post_id=like.post_id,
                    created_at=like.created_at,
                    user=AuthorSummary.model_validate(user),
                )
                for like, user in rows
            ],
            pagination=page.meta(total),
        )

    async def list_user_likes(
        self, db: AsyncSession, user_id: int, page: PageRequest
    ) -> UserLikesData:
        """Posts liked by a user, most recent like first."""
        user = await UserRepository(db).get(user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        likes = LikeRepository(db)

        total = await likes.count_for_user(user_id)
        rows = await likes.list_for_user_with_post(user_id, offset=page.offset, limit=page.limit)
        return UserLikesData(
            user=AuthorSummary.model_validate(user),
            likes=[
                LikedPostResponse(
                    id=row.like.id,
                    user_id=row.like.user_id,
                    post_id=row.like.post_id,
                    created_at=row.like.created_at,
                    post=build_post_response(row.post),
                )
                for row in rows
            ],
            pagination=page.meta(total),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
like_service = LikeService()
