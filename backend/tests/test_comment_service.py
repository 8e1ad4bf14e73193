"""
Agora Backend — Comment Service Tests
=======================================

What:  Comment listing/creation on existing posts, and author-only edits.
"""

import pytest

from app.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from app.models.post import Post
from app.schemas.comment import CommentCreateRequest, CommentUpdateRequest
from app.services.comment_service import CommentService
from app.services.pagination import PageRequest


@pytest.fixture
def service():
    return CommentService()


async def _post_by(session, author) -> Post:
    post = Post(title="Commented post", content="Post body for comments", author_id=author.id)
    session.add(post)
    await session.flush()
    return post


class TestCreateAndList:

    @pytest.mark.asyncio
    async def test_create_returns_author(self, db_session, service, alice, bob):
        post = await _post_by(db_session, alice)

        comment = await service.create_comment(
            db_session, bob, post.id, CommentCreateRequest(content="Great read")
        )

        assert comment.post_id == post.id
        assert comment.author_id == bob.id
        assert comment.author.full_name == "Bob B"

    @pytest.mark.asyncio
    async def test_create_on_missing_post(self, db_session, service, bob):
        with pytest.raises(NotFoundError, match="Post not found"):
            await service.create_comment(
                db_session, bob, 999, CommentCreateRequest(content="Hello?")
            )

    @pytest.mark.asyncio
    async def test_create_requires_identity(self, db_session, service, alice):
        post = await _post_by(db_session, alice)
        with pytest.raises(UnauthorizedError):
            await service.create_comment(
                db_session, None, post.id, CommentCreateRequest(content="Anonymous")
            )

    @pytest.mark.asyncio
    async def test_list_paginates(self, db_session, service, alice, bob):
        post = await _post_by(db_session, alice)
        for i in range(25):
            await service.create_comment(
                db_session, bob, post.id, CommentCreateRequest(content=f"Comment {i}")
            )

        first = await service.list_comments_for_post(db_session, post.id, PageRequest(limit=20))
        second = await service.list_comments_for_post(
            db_session, post.id, PageRequest(page=2, limit=20)
        )

        assert len(first.comments) == 20
        assert len(second.comments) == 5
        assert first.pagination.total_items == 25
        assert first.pagination.total_pages == 2
        # newest first
        assert first.comments[0].content == "Comment 24"

    @pytest.mark.asyncio
    async def test_list_on_missing_post(self, db_session, service):
        with pytest.raises(NotFoundError):
            await service.list_comments_for_post(db_session, 321, PageRequest(limit=20))


class TestOwnership:

    @pytest.mark.asyncio
    async def test_author_can_edit(self, db_session, service, alice, bob):
        post = await _post_by(db_session, alice)
        comment = await service.create_comment(
            db_session, bob, post.id, CommentCreateRequest(content="Typo hre")
        )

        updated = await service.update_comment(
            db_session, bob, comment.id, CommentUpdateRequest(content="Typo here")
        )
        assert updated.content == "Typo here"

    @pytest.mark.asyncio
    async def test_post_author_cannot_edit_others_comment(self, db_session, service, alice, bob):
        post = await _post_by(db_session, alice)
        comment = await service.create_comment(
            db_session, bob, post.id, CommentCreateRequest(content="Bob's words")
        )

        with pytest.raises(ForbiddenError, match="update this comment"):
            await service.update_comment(
                db_session, alice, comment.id, CommentUpdateRequest(content="Alice's words")
            )
        with pytest.raises(ForbiddenError, match="delete this comment"):
            await service.delete_comment(db_session, alice, comment.id)

        listing = await service.list_comments_for_post(db_session, post.id, PageRequest(limit=20))
        assert [c.content for c in listing.comments] == ["Bob's words"]

    @pytest.mark.asyncio
    async def test_author_can_delete(self, db_session, service, alice, bob):
        post = await _post_by(db_session, alice)
        comment = await service.create_comment(
            db_session, bob, post.id, CommentCreateRequest(content="Short lived")
        )

        await service.delete_comment(db_session, bob, comment.id)

        listing = await service.list_comments_for_post(db_session, post.id, PageRequest(limit=20))
        assert listing.comments == []
        assert listing.pagination.total_items == 0

    @pytest.mark.asyncio
    async def test_missing_comment(self, db_session, service, bob):
        with pytest.raises(NotFoundError, match="Comment not found"):
            await service.delete_comment(db_session, bob, 777)
