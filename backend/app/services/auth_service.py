"""
Agora Backend — Auth Service (Account Lifecycle)
==================================================

What:  Registration, login, profile and password management, account
       deletion, and resolving a bearer token to a User.
Who:   Called by the /api/auth routes and by the auth dependencies.

Password invariant:
    The only two places a password is written are `register` and
    `change_password`; both call CredentialManager.hash_password before the
    value reaches the model. There is no ORM hook that hashes implicitly,
    so there is nothing to bypass.

Flow (POST /api/auth/register):
    ┌──────────┐    ┌──────────────┐    ┌──────────┐    ┌─────────────┐
    │ Validate │───▶│ Uniqueness   │───▶│  Hash +  │───▶│ Issue token │
    │ (schema) │    │ pre-check    │    │  insert  │    │             │
    └──────────┘    └──────────────┘    └──────────┘    └─────────────┘
    A concurrent duplicate that slips past the pre-check is rejected by
    the unique constraint and reported as the same ConflictError.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, InvalidTokenError, UnauthorizedError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import (
    AuthData,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from app.services.credentials import CredentialManager, credential_manager

logger = logging.getLogger(__name__)


class AuthService:
    """
    Business logic for accounts.

    Stateless apart from the credential manager; each call receives the
    request's database session.
    """

    def __init__(self, credentials: Optional[CredentialManager] = None):
        self.credentials = credentials or credential_manager

    async def register(self, db: AsyncSession, data: RegisterRequest) -> AuthData:
        """
        Create an account and return it with a fresh access token.

        Raises:
            ConflictError: username or email already taken (→ 400)
        """
        users = UserRepository(db)

        if await users.get_by_email(data.email) is not None:
            raise ConflictError("Email already exists", context={"field": "email"})
        if await users.get_by_username(data.username) is not None:
            raise ConflictError("Username already exists", context={"field": "username"})

        user = User(
            username=data.username,
            email=data.email,
            password=self.credentials.hash_password(data.password),
            full_name=data.full_name,
            bio=data.bio,
        )
        await users.add(user)
        logger.info("User registered: id=%s username=%s", user.id, user.username)

        return AuthData(
            user=UserResponse.model_validate(user),
            token=self.credentials.issue_token(user.id),
        )

    async def login(self, db: AsyncSession, data: LoginRequest) -> AuthData:
        """
        Exchange email + password for an access token.

        Unknown email and wrong password produce the same 401 message so
        the response does not reveal which accounts exist.
        """
        user = await UserRepository(db).get_by_email(data.email)

        if user is None or not self.credentials.verify_password(data.password, user.password):
            logger.warning("Failed login attempt for %s", data.email)
            raise UnauthorizedError("Invalid credentials")

        logger.info("User logged in: id=%s", user.id)
        return AuthData(
            user=UserResponse.model_validate(user),
            token=self.credentials.issue_token(user.id),
        )

    async def authenticate(self, db: AsyncSession, token: str) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            ExpiredTokenError / InvalidTokenError: token rejected
            InvalidTokenError: token valid but the user no longer exists
        """
        user_id = self.credentials.verify_token(token)
        user = await UserRepository(db).get(user_id)
        if user is None:
            raise InvalidTokenError("Invalid token. User not found.")
        return user

    async def update_profile(
        self, db: AsyncSession, user: User, data: ProfileUpdateRequest
    ) -> UserResponse:
        """Apply the fields present in the request; username stays unique."""
        users = UserRepository(db)
        changes = data.model_dump(exclude_unset=True)

        new_username = changes.get("username")
        if new_username is not None and new_username != user.username:
            existing = await users.get_by_username(new_username)
            if existing is not None and existing.id != user.id:
                raise ConflictError("Username already exists", context={"field": "username"})

        for field, value in changes.items():
            # username and full_name are NOT NULL; an explicit null means "leave as is"
            if value is None and field != "bio":
                continue
            setattr(user, field, value)

        await users.save(user, conflict_message="Username already exists")
        logger.info("Profile updated: id=%s fields=%s", user.id, sorted(changes))
        return UserResponse.model_validate(user)

    async def change_password(
        self, db: AsyncSession, user: User, data: ChangePasswordRequest
    ) -> None:
        """
        Replace the user's password after verifying the current one.

        Raises:
            UnauthorizedError: current password is wrong (→ 401)
        """
        if not self.credentials.verify_password(data.current_password, user.password):
            logger.warning("Password change rejected for user %s: wrong current password", user.id)
            raise UnauthorizedError("Current password is incorrect")

        user.password = self.credentials.hash_password(data.new_password)
        await UserRepository(db).save(user)
        logger.info("Password changed: id=%s", user.id)

    async def delete_account(self, db: AsyncSession, user: User) -> None:
        """Delete the user with every post, comment and like that depends on it."""
        await UserRepository(db).delete(user)
        logger.info("Account deleted: id=%s", user.id)


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService()
