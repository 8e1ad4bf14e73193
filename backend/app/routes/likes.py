"""
Agora Backend — Like Route Handlers
=====================================

What:  Like and unlike posts as the caller, and browse likes by post or user.
How:   The acting user always comes from the token; there is no user id
       parameter on like/unlike, so nobody can like on someone else's behalf.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import ApiResponse, ErrorResponse
from app.schemas.like import LikeCountData, PostLikesData, UserLikesData
from app.services.like_service import like_service
from app.services.pagination import (
    DEFAULT_POST_LIKES_LIMIT,
    DEFAULT_USER_LIKES_LIMIT,
    MAX_LIMIT,
    MAX_PAGE,
    PageRequest,
)

router = APIRouter(prefix="/api/likes", tags=["Likes"])

_LIKE_ERRORS = {
    400: {"description": "Already liked / not liked", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    404: {"description": "Post not found", "model": ErrorResponse},
}


@router.post(
    "/post/{post_id}",
    response_model=ApiResponse[LikeCountData],
    status_code=status.HTTP_201_CREATED,
    responses=_LIKE_ERRORS,
    summary="Like a post",
)
async def like_post(
    post_id: int = Path(ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[LikeCountData]:
    data = await like_service.like_post(db, current_user, post_id)
    return ApiResponse(message="Post liked successfully", data=data)


@router.delete(
    "/post/{post_id}",
    response_model=ApiResponse[LikeCountData],
    responses=_LIKE_ERRORS,
    summary="Remove your like from a post",
)
async def unlike_post(
    post_id: int = Path(ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[LikeCountData]:
    data = await like_service.unlike_post(db, current_user, post_id)
    return ApiResponse(message="Post unliked successfully", data=data)


@router.get(
    "/post/{post_id}",
    response_model=ApiResponse[PostLikesData],
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Users who liked a post, most recent first",
)
async def list_post_likes(
    post_id: int = Path(ge=1),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=DEFAULT_POST_LIKES_LIMIT, ge=1, le=MAX_LIMIT),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PostLikesData]:
    data = await like_service.list_post_likes(db, post_id, PageRequest(page=page, limit=limit))
    return ApiResponse(data=data)


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[UserLikesData],
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Posts a user has liked, most recent like first",
)
async def list_user_likes(
    user_id: int = Path(ge=1),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=DEFAULT_USER_LIKES_LIMIT, ge=1, le=MAX_LIMIT),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[UserLikesData]:
    data = await like_service.list_user_likes(db, user_id, PageRequest(page=page, limit=limit))
    return ApiResponse(data=data)
