"""
Agora Backend — Comment Service
=================================

What:  List, create, update and delete comments on posts.
Who:   Called by the /api/comments routes.

Rules:
    - Listing and creating require the parent post to exist (404 otherwise)
    - Update/delete: existence (404) → ownership (403) → mutate
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.comment import Comment
from app.models.user import User
from app.repositories.comment_repository import CommentRepository
from app.repositories.post_repository import PostRepository
from app.schemas.comment import (
    CommentCreateRequest,
    CommentListData,
    CommentResponse,
    CommentUpdateRequest,
)
from app.schemas.user import AuthorSummary
from app.services.authorization import ensure_owner, require_identity
from app.services.pagination import PageRequest

logger = logging.getLogger(__name__)


def build_comment_response(comment: Comment, author: User) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        author_id=comment.author_id,
        post_id=comment.post_id,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        author=AuthorSummary.model_validate(author),
    )


class CommentService:

    async def _ensure_post_exists(self, db: AsyncSession, post_id: int) -> None:
        if not await PostRepository(db).exists(post_id):
            raise NotFoundError(resource="Post", resource_id=post_id)

    async def _get_owned(
        self, comments: CommentRepository, actor: Optional[User], comment_id: int, action: str
    ) -> Comment:
        actor = require_identity(actor)
        comment = await comments.get(comment_id)
        if comment is None:
            raise NotFoundError(resource="Comment", resource_id=comment_id)
        ensure_owner(actor, comment.author_id, resource="comment", action=action)
        return comment

    async def list_comments_for_post(
        self, db: AsyncSession, post_id: int, page: PageRequest
    ) -> CommentListData:
        """Comments on a post, newest first, each with its author."""
        await self._ensure_post_exists(db, post_id)

        comments = CommentRepository(db)
        total = await comments.count_for_post(post_id)
        rows = await comments.list_for_post_with_author(
            post_id, offset=page.offset, limit=page.limit
        )
        return CommentListData(
            comments=[build_comment_response(comment, author) for comment, author in rows],
            pagination=page.meta(total),
        )

    async def create_comment(
        self,
        db: AsyncSession,
        actor: Optional[User],
        post_id: int,
        data: CommentCreateRequest,
    ) -> CommentResponse:
        actor = require_identity(actor)
        await self._ensure_post_exists(db, post_id)

        comment = Comment(content=data.content, author_id=actor.id, post_id=post_id)
        await CommentRepository(db).add(comment)
        logger.info("Comment %s added to post %s by user %s", comment.id, post_id, actor.id)

        return build_comment_response(comment, actor)

    async def update_comment(
        self,
        db: AsyncSession,
        actor: Optional[User],
        comment_id: int,
        data: CommentUpdateRequest,
    ) -> CommentResponse:
        comments = CommentRepository(db)
        comment = await self._get_owned(comments, actor, comment_id, action="update")

        comment.content = data.content
        await comments.save(comment)
        logger.info("Comment %s updated", comment_id)

        return build_comment_response(comment, actor)

    async def delete_comment(
        self, db: AsyncSession, actor: Optional[User], comment_id: int
    ) -> None:
        comments = CommentRepository(db)
        comment = await self._get_owned(comments, actor, comment_id, action="delete")

        await comments.delete(comment)
        logger.info("Comment %s deleted", comment_id)


# ── Singleton Instance ────────────────────────────────────────────────────
comment_service = CommentService()
