"""
Agora Backend — User & Auth Schemas
=====================================

Request models carry the boundary validation rules (length, character set,
email format). Response models never declare `password`.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import EmailStr, Field, StringConstraints, field_validator

from app.schemas.common import CamelModel


Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9]+$"
    ),
]
FullName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
Bio = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
# Passwords are not trimmed: surrounding whitespace is part of the secret
NewPassword = Annotated[str, StringConstraints(min_length=6, max_length=100)]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorSummary(CamelModel):
    """The only user fields embedded in posts, comments and likes."""

    id: int
    username: str
    full_name: str


class UserResponse(CamelModel):
    """A user's own profile as returned by the auth endpoints."""

    id: int
    username: str
    email: str
    full_name: str
    bio: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AuthData(CamelModel):
    user: UserResponse
    token: str = Field(description="Bearer access token")


class UserData(CamelModel):
    user: UserResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(CamelModel):
    username: Username
    email: EmailStr
    password: NewPassword
    full_name: FullName
    bio: Optional[Bio] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ProfileUpdateRequest(CamelModel):
    """Partial update: omitted fields are left unchanged."""

    username: Optional[Username] = None
    full_name: Optional[FullName] = None
    bio: Optional[Bio] = None


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: NewPassword
