"""
Agora Backend — Comment Repository
====================================

What:  Persistence operations for Comment rows and the
       "comments of a post, each with its author" read use case.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, select

from app.models.comment import Comment
from app.models.user import User
from app.repositories.base import BaseRepository


class CommentRepository(BaseRepository):

    async def get(self, comment_id: int) -> Optional[Comment]:
        result = await self._execute(select(Comment).where(Comment.id == comment_id))
        return result.scalar_one_or_none()

    async def add(self, comment: Comment) -> Comment:
        self.session.add(comment)
        # FK failure here means the post vanished between the check and the insert
        await self._flush(conflict_message="Post no longer exists")
        return comment

    async def save(self, comment: Comment) -> Comment:
        await self._flush(conflict_message="Comment could not be updated")
        return comment

    async def delete(self, comment: Comment) -> None:
        await self._delete(comment)

    async def count_for_post(self, post_id: int) -> int:
        result = await self._execute(
            select(func.count(Comment.id)).where(Comment.post_id == post_id)
        )
        return result.scalar() or 0

    async def list_for_post_with_author(
        self,
        post_id: int,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Tuple[Comment, User]]:
        """Newest first. Without offset/limit every comment is returned."""
        query = (
            select(Comment, User)
            .join(User, User.id == Comment.author_id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self._execute(query)
        return [(row[0], row[1]) for row in result.all()]
