"""
Agora Backend — Comment Schemas
=================================
"""

from typing import Annotated, List

from pydantic import StringConstraints

from app.schemas.common import CamelModel, PaginationMeta
from app.schemas.post import PostCommentItem


CommentContent = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)
]


class CommentResponse(PostCommentItem):
    """A comment joined with its author summary."""


class CommentData(CamelModel):
    comment: CommentResponse


class CommentListData(CamelModel):
    comments: List[CommentResponse]
    pagination: PaginationMeta


class CommentCreateRequest(CamelModel):
    content: CommentContent


class CommentUpdateRequest(CamelModel):
    content: CommentContent
