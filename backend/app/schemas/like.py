"""
Agora Backend — Like Schemas
==============================
"""

from datetime import datetime
from typing import List

from app.schemas.common import CamelModel, PaginationMeta
from app.schemas.post import PostResponse
from app.schemas.user import AuthorSummary


class LikeResponse(CamelModel):
    """A like on a post, with the liker's summary."""

    id: int
    user_id: int
    post_id: int
    created_at: datetime
    user: AuthorSummary


class LikedPostResponse(CamelModel):
    """A like given by a user, with the liked post (author and counts)."""

    id: int
    user_id: int
    post_id: int
    created_at: datetime
    post: PostResponse


class LikeCountData(CamelModel):
    likes_count: int


class PostLikesData(CamelModel):
    likes_count: int
    likes: List[LikeResponse]
    pagination: PaginationMeta


class UserLikesData(CamelModel):
    user: AuthorSummary
    likes: List[LikedPostResponse]
    pagination: PaginationMeta
