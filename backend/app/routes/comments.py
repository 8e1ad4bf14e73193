"""
Agora Backend — Comment Route Handlers
========================================

    GET    /api/comments/post/{post_id}   public     {comments, pagination}
    POST   /api/comments/post/{post_id}   required   201 {comment}
    PUT    /api/comments/{comment_id}     author     {comment}
    DELETE /api/comments/{comment_id}     author
"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.comment import (
    CommentCreateRequest,
    CommentData,
    CommentListData,
    CommentUpdateRequest,
)
from app.schemas.common import ApiResponse, ErrorResponse
from app.services.comment_service import comment_service
from app.services.pagination import DEFAULT_COMMENTS_LIMIT, MAX_LIMIT, MAX_PAGE, PageRequest

router = APIRouter(prefix="/api/comments", tags=["Comments"])

_OWNER_ERRORS = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Not the author", "model": ErrorResponse},
    404: {"description": "Comment not found", "model": ErrorResponse},
}


@router.get(
    "/post/{post_id}",
    response_model=ApiResponse[CommentListData],
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="List a post's comments, newest first",
)
async def list_comments(
    post_id: int = Path(ge=1),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=DEFAULT_COMMENTS_LIMIT, ge=1, le=MAX_LIMIT),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[CommentListData]:
    data = await comment_service.list_comments_for_post(
        db, post_id, PageRequest(page=page, limit=limit)
    )
    return ApiResponse(data=data)


@router.post(
    "/post/{post_id}",
    response_model=ApiResponse[CommentData],
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Comment on a post",
)
async def create_comment(
    body: CommentCreateRequest,
    post_id: int = Path(ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[CommentData]:
    comment = await comment_service.create_comment(db, current_user, post_id, body)
    return ApiResponse(message="Comment created successfully", data=CommentData(comment=comment))


@router.put(
    "/{comment_id}",
    response_model=ApiResponse[CommentData],
    responses=_OWNER_ERRORS,
    summary="Edit a comment (author only)",
)
async def update_comment(
    body: CommentUpdateRequest,
    comment_id: int = Path(ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[CommentData]:
    comment = await comment_service.update_comment(db, current_user, comment_id, body)
    return ApiResponse(message="Comment updated successfully", data=CommentData(comment=comment))


@router.delete(
    "/{comment_id}",
    response_model=ApiResponse[None],
    responses=_OWNER_ERRORS,
    summary="Delete a comment (author only)",
)
async def delete_comment(
    comment_id: int = Path(ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[None]:
    await comment_service.delete_comment(db, current_user, comment_id)
    return ApiResponse(message="Comment deleted successfully")
