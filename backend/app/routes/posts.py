"""
Agora Backend — Post Route Handlers
=====================================

What:  The public feed, single-post detail, and owner-only mutations.
How:   Parameters are validated here (Path/Query bounds, request schemas);
       everything else is delegated to PostService.

Route order matters: /user/{user_id} is declared before /{post_id} so the
literal segment is never parsed as a post id.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user, get_optional_user
from app.models.user import User
from app.schemas.common import ApiResponse, ErrorResponse
from app.schemas.post import (
    PostCreateRequest,
    PostData,
    PostDetailData,
    PostListData,
    PostUpdateRequest,
    UserPostsData,
)
from app.services.pagination import DEFAULT_POSTS_LIMIT, MAX_LIMIT, MAX_PAGE, PageRequest
from app.services.post_service import post_service

router = APIRouter(prefix="/api/posts", tags=["Posts"])

_OWNER_ERRORS = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Not the author", "model": ErrorResponse},
    404: {"description": "Post not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=ApiResponse[PostListData],
    summary="List posts, newest first",
)
async def list_posts(
    page: int = Query(default=1, ge=1, le=MAX_PAGE, description="1-based page number"),
    limit: int = Query(default=DEFAULT_POSTS_LIMIT, ge=1, le=MAX_LIMIT),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PostListData]:
    data = await post_service.list_posts(db, PageRequest(page=page, limit=limit))
    return ApiResponse(data=data)


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[UserPostsData],
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="List one user's posts, newest first",
)
async def list_posts_by_user(
    user_id: int = Path(ge=1),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=DEFAULT_POSTS_LIMIT, ge=1, le=MAX_LIMIT),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[UserPostsData]:
    data = await post_service.list_posts_by_user(db, user_id, PageRequest(page=page, limit=limit))
    return ApiResponse(data=data)


@router.get(
    "/{post_id}",
    response_model=ApiResponse[PostDetailData],
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Single post with comments, likes and isLikedByUser",
)
async def get_post(
    post_id: int = Path(ge=1),
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PostDetailData]:
    post = await post_service.get_post(db, post_id, viewer=viewer)
    return ApiResponse(data=PostDetailData(post=post))


@router.post(
    "",
    response_model=ApiResponse[PostData],
    status_code=status.HTTP_201_CREATED,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Create a post",
)
async def create_post(
    body: PostCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PostData]:
    post = await post_service.create_post(db, current_user, body)
    return ApiResponse(message="Post created successfully", data=PostData(post=post))


@router.put(
    "/{post_id}",
    response_model=ApiResponse[PostData],
    responses=_OWNER_ERRORS,
    summary="Update title and/or content (author only)",
)
async def update_post(
    body: PostUpdateRequest,
    post_id: int = Path(ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PostData]:
    post = await post_service.update_post(db, current_user, post_id, body)
    return ApiResponse(message="Post updated successfully", data=PostData(post=post))


@router.delete(
    "/{post_id}",
    response_model=ApiResponse[None],
    responses=_OWNER_ERRORS,
    summary="Delete a post with its comments and likes (author only)",
)
async def delete_post(
    post_id: int = Path(ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[None]:
    await post_service.delete_post(db, current_user, post_id)
    return ApiResponse(message="Post deleted successfully")
