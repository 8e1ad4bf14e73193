"""
Agora Backend — Like Service Tests
====================================

What:  One like per (user, post), recomputed counts, and the like listings.
"""

import pytest
from sqlalchemy import func, select

from app.exceptions import ConflictError, NotFoundError
from app.models.like import Like
from app.models.post import Post
from app.services.like_service import LikeService
from app.services.pagination import PageRequest


async def _post_by(session, author, title: str = "Likeable post") -> Post:
    post = Post(title=title, content="Worth a like or two", author_id=author.id)
    session.add(post)
    await session.flush()
    return post


async def _like_rows(session, post_id: int) -> int:
    result = await session.execute(select(func.count(Like.id)).where(Like.post_id == post_id))
    return result.scalar()


class TestLikeUnlike:

    def setup_method(self):
        self.service = LikeService()

    @pytest.mark.asyncio
    async def test_like_returns_count(self, db_session, alice, bob):
        post = await _post_by(db_session, alice)

        assert (await self.service.like_post(db_session, bob, post.id)).likes_count == 1
        assert (await self.service.like_post(db_session, alice, post.id)).likes_count == 2

    @pytest.mark.asyncio
    async def test_double_like_conflicts_and_count_unchanged(self, db_session, alice, bob):
        post = await _post_by(db_session, alice)
        await self.service.like_post(db_session, bob, post.id)

        with pytest.raises(ConflictError, match="already liked"):
            await self.service.like_post(db_session, bob, post.id)

        assert await _like_rows(db_session, post.id) == 1

    @pytest.mark.asyncio
    async def test_unlike(self, db_session, alice, bob):
        post = await _post_by(db_session, alice)
        await self.service.like_post(db_session, bob, post.id)

        result = await self.service.unlike_post(db_session, bob, post.id)

        assert result.likes_count == 0
        assert await _like_rows(db_session, post.id) == 0

    @pytest.mark.asyncio
    async def test_unlike_without_like(self, db_session, alice, bob):
        post = await _post_by(db_session, alice)
        await self.service.like_post(db_session, alice, post.id)

        with pytest.raises(ConflictError, match="have not liked"):
            await self.service.unlike_post(db_session, bob, post.id)

        assert await _like_rows(db_session, post.id) == 1

    @pytest.mark.asyncio
    async def test_like_missing_post(self, db_session, bob):
        with pytest.raises(NotFoundError, match="Post not found"):
            await self.service.like_post(db_session, bob, 404)


class TestLikeListings:

    def setup_method(self):
        self.service = LikeService()

    @pytest.mark.asyncio
    async def test_post_likes_include_users(self, db_session, alice, bob, user_factory):
        carol = await user_factory("carol3", "carol@example.com", "Carol C")
        post = await _post_by(db_session, alice)
        await self.service.like_post(db_session, bob, post.id)
        await self.service.like_post(db_session, carol, post.id)

        result = await self.service.list_post_likes(db_session, post.id, PageRequest(limit=20))

        assert result.likes_count == 2
        assert [like.user.username for like in result.likes] == ["carol3", "bob2"]
        assert result.pagination.total_items == 2

    @pytest.mark.asyncio
    async def test_user_likes_embed_post_with_counts(self, db_session, alice, bob):
        first = await _post_by(db_session, alice, "First liked post")
        second = await _post_by(db_session, alice, "Second liked post")
        await self.service.like_post(db_session, bob, first.id)
        await self.service.like_post(db_session, bob, second.id)
        await self.service.like_post(db_session, alice, second.id)

        result = await self.service.list_user_likes(db_session, bob.id, PageRequest(limit=10))

        assert result.user.username == "bob2"
        assert result.pagination.total_items == 2
        newest = result.likes[0]
        assert newest.post.title == "Second liked post"
        assert newest.post.author.username == "alice1"
        assert newest.post.likes_count == 2

    @pytest.mark.asyncio
    async def test_user_likes_missing_user(self, db_session):
        with pytest.raises(NotFoundError, match="User not found"):
            await self.service.list_user_likes(db_session, 999, PageRequest(limit=10))
