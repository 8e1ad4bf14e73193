"""
Agora Backend — Post Schemas
==============================
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field, StringConstraints

from app.schemas.common import CamelModel, PaginationMeta
from app.schemas.user import AuthorSummary


Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(CamelModel):
    """
    A post with its author summary and derived counts.

    commentsCount / likesCount are computed from the related rows at read
    time; they are never stored on the post.
    """

    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary
    comments_count: int = 0
    likes_count: int = 0


class PostCommentItem(CamelModel):
    id: int
    content: str
    author_id: int
    post_id: int
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary


class PostLikeItem(CamelModel):
    id: int
    user_id: int
    created_at: datetime
    user: AuthorSummary


class PostDetailResponse(PostResponse):
    """
    Single-post view (GET /api/posts/{id}).

    isLikedByUser is only true when the request carried a valid token for a
    user who liked the post.
    """

    is_liked_by_user: bool = False
    comments: List[PostCommentItem] = Field(default_factory=list)
    likes: List[PostLikeItem] = Field(default_factory=list)


class PostData(CamelModel):
    post: PostResponse


class PostDetailData(CamelModel):
    post: PostDetailResponse


class PostListData(CamelModel):
    posts: List[PostResponse]
    pagination: PaginationMeta


class UserPostsData(CamelModel):
    user: AuthorSummary
    posts: List[PostResponse]
    pagination: PaginationMeta


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostCreateRequest(CamelModel):
    title: Title
    content: Content


class PostUpdateRequest(CamelModel):
    """Partial update: omitted fields are left unchanged."""

    title: Optional[Title] = None
    content: Optional[Content] = None
