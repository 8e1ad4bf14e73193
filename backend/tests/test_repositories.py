"""
Agora Backend — Repository Tests
==================================

What:  Unique-constraint violations raised by the database surface as
       ConflictError (HTTP 400), even when no service pre-check runs first.
"""

import pytest

from app.exceptions import ConflictError
from app.models.like import Like
from app.models.post import Post
from app.models.user import User
from app.repositories.like_repository import LikeRepository
from app.repositories.user_repository import UserRepository
from app.services.credentials import credential_manager


class TestConstraintMapping:

    @pytest.mark.asyncio
    async def test_second_like_row_conflicts(self, db_session, alice, bob):
        post = Post(title="Race target", content="Two likes at once", author_id=alice.id)
        db_session.add(post)
        await db_session.flush()
        repo = LikeRepository(db_session)

        await repo.add(Like(user_id=bob.id, post_id=post.id))
        with pytest.raises(ConflictError) as exc_info:
            await repo.add(Like(user_id=bob.id, post_id=post.id))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "You have already liked this post"
        assert "constraint_error" in exc_info.value.context

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(self, db_session, alice):
        repo = UserRepository(db_session)
        duplicate = User(
            username=alice.username,
            email="someone-else@example.com",
            password=credential_manager.hash_password("secret1"),
            full_name="Not Alice",
        )

        with pytest.raises(ConflictError) as exc_info:
            await repo.add(duplicate)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Username or email already exists"
