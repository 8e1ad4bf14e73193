"""
Agora Backend — Post SQLAlchemy Model
=======================================

What:  ORM model representing the `posts` table.

Query Patterns:
    - Feed: ORDER BY created_at DESC, id DESC LIMIT :limit OFFSET :offset
      → uses idx_posts_created_at
    - Posts by author: WHERE author_id = :id ORDER BY created_at DESC
      → uses idx_posts_author_id

Counts (commentsCount, likesCount) are not stored here; they are computed
with COUNT subqueries on every read by PostRepository.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.user import utcnow


class Post(Base):
    """A post authored by a user. Mutable and deletable only by its author."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )

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

    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
        Index("idx_posts_author_id", author_id),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id}, title='{self.title}')>"
