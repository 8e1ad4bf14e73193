"""
Agora Backend — Post Service
==============================

What:  Create, read, update and delete posts; compose post views with the
       author summary and derived counts.
Who:   Called by the /api/posts routes; LikeService reuses the view builders.

Mutation flow (update/delete):
    existence check (404) → ownership check (403) → mutate → re-read view

Counts are taken from COUNT subqueries in PostRepository on every read,
so a like or comment is reflected by the very next request.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.post import Post
from app.models.user import User
from app.repositories.comment_repository import CommentRepository
from app.repositories.like_repository import LikeRepository
from app.repositories.post_repository import PostRepository, PostWithStats
from app.repositories.user_repository import UserRepository
from app.schemas.post import (
    PostCommentItem,
    PostCreateRequest,
    PostDetailResponse,
    PostLikeItem,
    PostListData,
    PostResponse,
    PostUpdateRequest,
    UserPostsData,
)
from app.schemas.user import AuthorSummary
from app.services.authorization import ensure_owner, require_identity
from app.services.pagination import PageRequest

logger = logging.getLogger(__name__)


def build_post_response(stats: PostWithStats) -> PostResponse:
    post = stats.post
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        author_id=post.author_id,
        created_at=post.created_at,
        updated_at=post.updated_at,
        author=AuthorSummary.model_validate(stats.author),
        comments_count=stats.comments_count,
        likes_count=stats.likes_count,
    )


class PostService:
    """Business logic for posts. Stateless; receives the session per call."""

    async def _load_view(self, posts: PostRepository, post_id: int) -> PostWithStats:
        stats = await posts.get_with_author_and_counts(post_id)
        if stats is None:
            raise NotFoundError(resource="Post", resource_id=post_id)
        return stats

    async def create_post(
        self, db: AsyncSession, actor: Optional[User], data: PostCreateRequest
    ) -> PostResponse:
        actor = require_identity(actor)
        posts = PostRepository(db)

        post = Post(title=data.title, content=data.content, author_id=actor.id)
        await posts.add(post)
        logger.info("Post %s created by user %s", post.id, actor.id)

        return build_post_response(await self._load_view(posts, post.id))

    async def get_post(
        self, db: AsyncSession, post_id: int, viewer: Optional[User] = None
    ) -> PostDetailResponse:
        """
        Single post with author, counts, comments and likes.

        `viewer` comes from optional authentication; without it
        isLikedByUser is False.
        """
        stats = await self._load_view(PostRepository(db), post_id)
        comments = await CommentRepository(db).list_for_post_with_author(post_id)
        likes = await LikeRepository(db).list_for_post_with_user(post_id)

        is_liked = viewer is not None and any(like.user_id == viewer.id for like, _ in likes)

        base = build_post_response(stats)
        return PostDetailResponse(
            **base.model_dump(),
            is_liked_by_user=is_liked,
            comments=[
                PostCommentItem(
                    id=comment.id,
                    content=comment.content,
                    author_id=comment.author_id,
                    post_id=comment.post_id,
                    created_at=comment.created_at,
                    updated_at=comment.updated_at,
                    author=AuthorSummary.model_validate(author),
                )
                for comment, author in comments
            ],
            likes=[
                PostLikeItem(
                    id=like.id,
                    user_id=like.user_id,
                    created_at=like.created_at,
                    user=AuthorSummary.model_validate(liker),
                )
                for like, liker in likes
            ],
        )

    async def list_posts(self, db: AsyncSession, page: PageRequest) -> PostListData:
        posts = PostRepository(db)
        total = await posts.count()
        rows = await posts.list_with_author_and_counts(offset=page.offset, limit=page.limit)
        return PostListData(
            posts=[build_post_response(row) for row in rows],
            pagination=page.meta(total),
        )

    async def list_posts_by_user(
        self, db: AsyncSession, user_id: int, page: PageRequest
    ) -> UserPostsData:
        user = await UserRepository(db).get(user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)

        posts = PostRepository(db)
        total = await posts.count(author_id=user_id)
        rows = await posts.list_with_author_and_counts(
            offset=page.offset, limit=page.limit, author_id=user_id
        )
        return UserPostsData(
            user=AuthorSummary.model_validate(user),
            posts=[build_post_response(row) for row in rows],
            pagination=page.meta(total),
        )

    async def update_post(
        self,
        db: AsyncSession,
        actor: Optional[User],
        post_id: int,
        data: PostUpdateRequest,
    ) -> PostResponse:
        actor = require_identity(actor)
        posts = PostRepository(db)

        post = await posts.get(post_id)
        if post is None:
            raise NotFoundError(resource="Post", resource_id=post_id)
        ensure_owner(actor, post.author_id, resource="post", action="update")

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(post, field, value)
        await posts.save(post)
        logger.info("Post %s updated by user %s (fields=%s)", post_id, actor.id, sorted(changes))

        return build_post_response(await self._load_view(posts, post_id))

    async def delete_post(self, db: AsyncSession, actor: Optional[User], post_id: int) -> None:
        """Delete a post and, in the same transaction, its comments and likes."""
        actor = require_identity(actor)
        posts = PostRepository(db)

        post = await posts.get(post_id)
        if post is None:
            raise NotFoundError(resource="Post", resource_id=post_id)
        ensure_owner(actor, post.author_id, resource="post", action="delete")

        await posts.delete(post)
        logger.info("Post %s deleted by user %s", post_id, actor.id)


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
