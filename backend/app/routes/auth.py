"""
Agora Backend — Auth Route Handlers
=====================================

What:  Registration, login and the authenticated user's own account.
Who:   Called by the frontend sign-up, sign-in and profile screens.

    POST   /api/auth/register   public     201 {user, token}
    POST   /api/auth/login      public     200 {user, token}
    GET    /api/auth/me         required   200 {user}
    PUT    /api/auth/profile    required   200 {user}
    PUT    /api/auth/password   required   200
    DELETE /api/auth/me         required   200
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import ApiResponse, ErrorResponse
from app.schemas.user import (
    AuthData,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserData,
    UserResponse,
)
from app.services.auth_service import auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])

_AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation failed or duplicate", "model": ErrorResponse}},
    summary="Create an account",
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[AuthData]:
    data = await auth_service.register(db, body)
    return ApiResponse(message="User registered successfully", data=data)


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Exchange email and password for a token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[AuthData]:
    data = await auth_service.login(db, body)
    return ApiResponse(message="Login successful", data=data)


@router.get(
    "/me",
    response_model=ApiResponse[UserData],
    responses=_AUTH_ERRORS,
    summary="Current user",
)
async def get_me(current_user: User = Depends(get_current_user)) -> ApiResponse[UserData]:
    return ApiResponse(data=UserData(user=UserResponse.model_validate(current_user)))


@router.put(
    "/profile",
    response_model=ApiResponse[UserData],
    responses=_AUTH_ERRORS,
    summary="Update username, full name or bio",
)
async def update_profile(
    body: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[UserData]:
    user = await auth_service.update_profile(db, current_user, body)
    return ApiResponse(message="Profile updated successfully", data=UserData(user=user))


@router.put(
    "/password",
    response_model=ApiResponse[None],
    responses=_AUTH_ERRORS,
    summary="Change password",
)
async def change_password(
    body: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[None]:
    await auth_service.change_password(db, current_user, body)
    return ApiResponse(message="Password changed successfully")


@router.delete(
    "/me",
    response_model=ApiResponse[None],
    responses=_AUTH_ERRORS,
    summary="Delete the account with all of its posts, comments and likes",
)
async def delete_account(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[None]:
    await auth_service.delete_account(db, current_user)
    return ApiResponse(message="Account deleted successfully")
