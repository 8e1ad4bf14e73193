"""
Agora Backend — User SQLAlchemy Model
=======================================

What:  ORM model representing the `users` table.
Who:   Used by UserRepository for CRUD operations and by Alembic.

Table Design:
    - Integer primary key (autoincrement)
    - username / email: unique constraints; the database is the final arbiter
      of uniqueness, services pre-check only to return a friendly message
    - password: bcrypt hash produced by the credential manager. There is no
      save hook; callers hash explicitly before assigning.
    - bio: optional free text
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    A registered account.

    Lifecycle:
        1. Created by AuthService.register (password hashed first)
        2. Profile fields updated by AuthService.update_profile
        3. Password replaced by AuthService.change_password (hashed first)
        4. Deleted by AuthService.delete_account, which removes every post,
           comment and like that depends on the user in the same transaction
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Alphanumeric handle, 3-50 characters",
    )

    email: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Lower-cased email address",
    )

    # Never serialized: response schemas do not declare this field
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    full_name: Mapped[str] = mapped_column(String(100), nullable=False)

    bio: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
