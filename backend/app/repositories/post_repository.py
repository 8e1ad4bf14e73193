"""
Agora Backend — Post Repository
=================================

What:  Persistence operations for Post rows, plus the read use cases that
       join a post with its author and derived counts.
How:   commentsCount / likesCount are correlated COUNT scalar subqueries,
       recomputed on every read. Nothing is cached or stored as a counter.

Query plan (feed page):
    SELECT posts.*, users.*,
           (SELECT count(comments.id) FROM comments WHERE comments.post_id = posts.id),
           (SELECT count(likes.id) FROM likes WHERE likes.post_id = posts.id)
    FROM posts JOIN users ON users.id = posts.author_id
    ORDER BY posts.created_at DESC, posts.id DESC
    LIMIT :limit OFFSET :offset

    The id tie-breaker keeps ordering stable when timestamps collide, so
    consecutive pages never repeat or skip a post.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import delete, func, select

from app.models.comment import Comment
from app.models.like import Like
from app.models.post import Post
from app.models.user import User
from app.repositories.base import BaseRepository


@dataclass
class PostWithStats:
    """A post joined with its author and derived counts."""

    post: Post
    author: User
    comments_count: int
    likes_count: int


def comments_count_column():
    return (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("comments_count")
    )


def likes_count_column():
    return (
        select(func.count(Like.id))
        .where(Like.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("likes_count")
    )


def post_with_stats_query():
    return (
        select(Post, User, comments_count_column(), likes_count_column())
        .join(User, User.id == Post.author_id)
    )


class PostRepository(BaseRepository):

    async def get(self, post_id: int) -> Optional[Post]:
        result = await self._execute(select(Post).where(Post.id == post_id))
        return result.scalar_one_or_none()

    async def exists(self, post_id: int) -> bool:
        result = await self._execute(select(Post.id).where(Post.id == post_id))
        return result.scalar_one_or_none() is not None

    async def add(self, post: Post) -> Post:
        self.session.add(post)
        await self._flush(conflict_message="Post author does not exist")
        return post

    async def save(self, post: Post) -> Post:
        await self._flush(conflict_message="Post could not be updated")
        return post

    async def delete(self, post: Post) -> None:
        """Delete a post with its likes and comments, dependents first."""
        await self._execute(delete(Like).where(Like.post_id == post.id))
        await self._execute(delete(Comment).where(Comment.post_id == post.id))
        await self._delete(post)

    async def count(self, author_id: Optional[int] = None) -> int:
        query = select(func.count(Post.id))
        if author_id is not None:
            query = query.where(Post.author_id == author_id)
        result = await self._execute(query)
        return result.scalar() or 0

    async def get_with_author_and_counts(self, post_id: int) -> Optional[PostWithStats]:
        result = await self._execute(post_with_stats_query().where(Post.id == post_id))
        row = result.one_or_none()
        if row is None:
            return None
        return PostWithStats(
            post=row[0], author=row[1], comments_count=row[2] or 0, likes_count=row[3] or 0
        )

    async def list_with_author_and_counts(
        self,
        offset: int,
        limit: int,
        author_id: Optional[int] = None,
    ) -> List[PostWithStats]:
        query = post_with_stats_query()
        if author_id is not None:
            query = query.where(Post.author_id == author_id)
        query = (
            query.order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
        )

        result = await self._execute(query)
        return [
            PostWithStats(
                post=row[0], author=row[1], comments_count=row[2] or 0, likes_count=row[3] or 0
            )
            for row in result.all()
        ]
