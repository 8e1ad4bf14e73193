"""
Agora Backend — Like Repository
=================================

What:  Persistence operations for Like rows.
How:   `add` relies on the `uq_likes_user_post` unique constraint: if two
       requests from the same user race past LikeService's pre-check, the
       second flush raises IntegrityError and surfaces as ConflictError.

Read use cases:
    - list_for_post_with_user:  likes on a post, each with the liker's summary
    - list_for_user_with_post:  posts a user liked, each with author and counts
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func, select

from app.models.like import Like
from app.models.post import Post
from app.models.user import User
from app.repositories.base import BaseRepository
from app.repositories.post_repository import (
    PostWithStats,
    comments_count_column,
    likes_count_column,
)


@dataclass
class LikedPost:
    """A like given by a user, joined with the post it points to."""

    like: Like
    post: PostWithStats


class LikeRepository(BaseRepository):

    async def get_for_user_and_post(self, user_id: int, post_id: int) -> Optional[Like]:
        result = await self._execute(
            select(Like).where(Like.user_id == user_id, Like.post_id == post_id)
        )
        return result.scalar_one_or_none()

    async def add(self, like: Like) -> Like:
        self.session.add(like)
        await self._flush(conflict_message="You have already liked this post")
        return like

    async def delete(self, like: Like) -> None:
        await self._delete(like)

    async def count_for_post(self, post_id: int) -> int:
        result = await self._execute(
            select(func.count(Like.id)).where(Like.post_id == post_id)
        )
        return result.scalar() or 0

    async def count_for_user(self, user_id: int) -> int:
        result = await self._execute(
            select(func.count(Like.id)).where(Like.user_id == user_id)
        )
        return result.scalar() or 0

    async def list_for_post_with_user(
        self,
        post_id: int,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Tuple[Like, User]]:
        query = (
            select(Like, User)
            .join(User, User.id == Like.user_id)
            .where(Like.post_id == post_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self._execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def list_for_user_with_post(
        self,
        user_id: int,
        offset: int,
        limit: int,
    ) -> List[LikedPost]:
        query = (
            select(Like, Post, User, comments_count_column(), likes_count_column())
            .join(Post, Post.id == Like.post_id)
            .join(User, User.id == Post.author_id)
            .where(Like.user_id == user_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
            .offset(offset)
            .limit(limit)
        )

        result = await self._execute(query)
        return [
            LikedPost(
                like=row[0],
                post=PostWithStats(
                    post=row[1],
                    author=row[2],
                    comments_count=row[3] or 0,
                    likes_count=row[4] or 0,
                ),
            )
            for row in result.all()
        ]
