"""
Agora Backend — User Repository
=================================

What:  Persistence operations for User rows.
Who:   AuthService, PostService and LikeService (user lookups for
       "posts by user" / "likes by user").

Cascade on delete:
    Deleting a user removes, in order:
        1. likes given by the user, and likes on the user's posts
        2. comments written by the user, and comments on the user's posts
        3. the user's posts
        4. the user
    All statements run in the request transaction; the session dependency
    commits them together or rolls them all back.
"""

from typing import Optional

from sqlalchemy import delete, or_, select

from app.models.comment import Comment
from app.models.like import Like
from app.models.post import Post
from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    async def get(self, user_id: int) -> Optional[User]:
        result = await self._execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self._execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self._execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        """Insert a user. `user.password` must already be hashed."""
        self.session.add(user)
        await self._flush(conflict_message="Username or email already exists")
        return user

    async def save(self, user: User, conflict_message: str = "Username already exists") -> User:
        """Flush pending attribute changes on an already-loaded user."""
        await self._flush(conflict_message=conflict_message)
        return user

    async def delete(self, user: User) -> None:
        owned_posts = select(Post.id).where(Post.author_id == user.id)

        await self._execute(
            delete(Like).where(
                or_(Like.user_id == user.id, Like.post_id.in_(owned_posts))
            )
        )
        await self._execute(
            delete(Comment).where(
                or_(Comment.author_id == user.id, Comment.post_id.in_(owned_posts))
            )
        )
        await self._execute(delete(Post).where(Post.author_id == user.id))
        await self._delete(user)
