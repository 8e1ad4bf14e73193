"""
Agora Backend — Post Service Tests
====================================

What:  Post CRUD, derived counts, ownership rules, cascade delete and
       pagination against a real (SQLite) session.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from app.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from app.models.comment import Comment
from app.models.like import Like
from app.models.post import Post
from app.schemas.post import PostCreateRequest, PostUpdateRequest
from app.services.pagination import PageRequest
from app.services.post_service import PostService


async def _seed_posts(session, author, count: int):
    """Insert `count` posts one minute apart; the last one is the newest."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    posts = [
        Post(
            title=f"Post number {i}",
            content=f"Body of post number {i}",
            author_id=author.id,
            created_at=base + timedelta(minutes=i),
            updated_at=base + timedelta(minutes=i),
        )
        for i in range(1, count + 1)
    ]
    session.add_all(posts)
    await session.flush()
    return posts


class TestCreateAndRead:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_post_has_zero_counts(self, db_session, alice):
        post = await self.service.create_post(
            db_session, alice, PostCreateRequest(title="Hello world", content="Some long content")
        )

        assert post.id is not None
        assert post.author_id == alice.id
        assert post.author.username == "alice1"
        assert post.comments_count == 0
        assert post.likes_count == 0

    @pytest.mark.asyncio
    async def test_create_requires_identity(self, db_session):
        with pytest.raises(UnauthorizedError):
            await self.service.create_post(
                db_session, None, PostCreateRequest(title="Hello world", content="Some long content")
            )

    @pytest.mark.asyncio
    async def test_get_post_counts_and_liked_flag(self, db_session, alice, bob):
        (post,) = await _seed_posts(db_session, alice, 1)
        db_session.add_all([
            Comment(content="First!", author_id=bob.id, post_id=post.id),
            Comment(content="Second", author_id=alice.id, post_id=post.id),
            Like(user_id=bob.id, post_id=post.id),
        ])
        await db_session.flush()

        as_bob = await self.service.get_post(db_session, post.id, viewer=bob)
        assert as_bob.comments_count == 2
        assert as_bob.likes_count == 1
        assert as_bob.is_liked_by_user is True
        assert {c.content for c in as_bob.comments} == {"First!", "Second"}
        assert as_bob.likes[0].user.username == "bob2"

        as_alice = await self.service.get_post(db_session, post.id, viewer=alice)
        assert as_alice.is_liked_by_user is False

        anonymous = await self.service.get_post(db_session, post.id)
        assert anonymous.is_liked_by_user is False

    @pytest.mark.asyncio
    async def test_get_missing_post(self, db_session):
        with pytest.raises(NotFoundError, match="Post not found"):
            await self.service.get_post(db_session, 999)


class TestListing:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_second_page_of_fifteen(self, db_session, alice):
        await _seed_posts(db_session, alice, 15)

        result = await self.service.list_posts(db_session, PageRequest(page=2, limit=10))

        assert len(result.posts) == 5
        assert result.pagination.total_pages == 2
        assert result.pagination.total_items == 15
        assert result.pagination.current_page == 2
        assert result.pagination.has_next_page is False

    @pytest.mark.asyncio
    async def test_newest_first(self, db_session, alice):
        await _seed_posts(db_session, alice, 3)

        result = await self.service.list_posts(db_session, PageRequest(page=1, limit=10))

        assert [p.title for p in result.posts] == [
            "Post number 3", "Post number 2", "Post number 1",
        ]

    @pytest.mark.asyncio
    async def test_ties_broken_by_id(self, db_session, alice):
        same_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
        db_session.add_all([
            Post(title=f"Tied {i}", content="Same timestamp body", author_id=alice.id,
                 created_at=same_time, updated_at=same_time)
            for i in range(4)
        ])
        await db_session.flush()

        first = await self.service.list_posts(db_session, PageRequest(page=1, limit=2))
        second = await self.service.list_posts(db_session, PageRequest(page=2, limit=2))

        ids = [p.id for p in first.posts + second.posts]
        assert ids == sorted(ids, reverse=True)
        assert len(set(ids)) == 4

    @pytest.mark.asyncio
    async def test_posts_by_user(self, db_session, alice, bob):
        await _seed_posts(db_session, alice, 2)
        db_session.add(Post(title="Bob's only", content="Bob writes here", author_id=bob.id))
        await db_session.flush()

        result = await self.service.list_posts_by_user(db_session, bob.id, PageRequest())

        assert result.user.username == "bob2"
        assert [p.title for p in result.posts] == ["Bob's only"]
        assert result.pagination.total_items == 1

    @pytest.mark.asyncio
    async def test_posts_by_missing_user(self, db_session):
        with pytest.raises(NotFoundError, match="User not found"):
            await self.service.list_posts_by_user(db_session, 404, PageRequest())


class TestOwnership:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_owner_updates_title_only(self, db_session, alice):
        (post,) = await _seed_posts(db_session, alice, 1)

        result = await self.service.update_post(
            db_session, alice, post.id, PostUpdateRequest(title="Renamed post")
        )

        assert result.title == "Renamed post"
        assert result.content == "Body of post number 1"

    @pytest.mark.asyncio
    async def test_non_owner_cannot_update(self, db_session, alice, bob):
        (post,) = await _seed_posts(db_session, alice, 1)

        with pytest.raises(ForbiddenError, match="not authorized to update this post"):
            await self.service.update_post(
                db_session, bob, post.id, PostUpdateRequest(title="Hijacked title")
            )
        assert post.title == "Post number 1"

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, db_session, alice, bob):
        (post,) = await _seed_posts(db_session, alice, 1)

        with pytest.raises(ForbiddenError, match="not authorized to delete this post"):
            await self.service.delete_post(db_session, bob, post.id)

        count = (await db_session.execute(select(func.count(Post.id)))).scalar()
        assert count == 1

    @pytest.mark.asyncio
    async def test_update_missing_post_is_404_before_403(self, db_session, bob):
        with pytest.raises(NotFoundError):
            await self.service.update_post(
                db_session, bob, 12345, PostUpdateRequest(title="Whatever title")
            )

    @pytest.mark.asyncio
    async def test_delete_cascades_to_comments_and_likes(self, db_session, alice, bob):
        keep, doomed = await _seed_posts(db_session, alice, 2)
        db_session.add_all([
            Comment(content="On doomed", author_id=bob.id, post_id=doomed.id),
            Like(user_id=bob.id, post_id=doomed.id),
            Comment(content="On keep", author_id=bob.id, post_id=keep.id),
            Like(user_id=bob.id, post_id=keep.id),
        ])
        await db_session.flush()

        await self.service.delete_post(db_session, alice, doomed.id)

        comments = (await db_session.execute(select(Comment.content))).scalars().all()
        assert comments == ["On keep"]
        like_posts = (await db_session.execute(select(Like.post_id))).scalars().all()
        assert like_posts == [keep.id]
        with pytest.raises(NotFoundError):
            await self.service.get_post(db_session, doomed.id)
