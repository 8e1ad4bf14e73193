"""Create users, posts, comments and likes tables

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Initial schema for accounts and the content they own.
How:   Every foreign key cascades on delete, so removing a user removes
       their posts, and removing a post removes its comments and likes.
       One like per (user, post) is enforced by uq_likes_user_post.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _fk(column: str, target: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], [target], ondelete="CASCADE", onupdate="CASCADE"
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(50), nullable=False,
                  comment="Alphanumeric handle, 3-50 characters"),
        sa.Column("email", sa.String(100), nullable=False,
                  comment="Lower-cased email address"),
        sa.Column("password", sa.String(255), nullable=False,
                  comment="bcrypt hash of the user's password"),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_posts"),
        _fk("author_id", "users.id"),
    )
    op.create_index("idx_posts_created_at", "posts", [sa.text("created_at DESC")])
    op.create_index("idx_posts_author_id", "posts", ["author_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_comments"),
        _fk("author_id", "users.id"),
        _fk("post_id", "posts.id"),
    )
    op.create_index(
        "idx_comments_post_id_created_at", "comments", ["post_id", sa.text("created_at DESC")]
    )
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    op.create_table(
        "likes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_likes"),
        _fk("user_id", "users.id"),
        _fk("post_id", "posts.id"),
        sa.UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),
    )
    op.create_index("idx_likes_post_id", "likes", ["post_id"])


def downgrade() -> None:
    op.drop_index("idx_likes_post_id", table_name="likes")
    op.drop_table("likes")
    op.drop_index("idx_comments_author_id", table_name="comments")
    op.drop_index("idx_comments_post_id_created_at", table_name="comments")
    op.drop_table("comments")
    op.drop_index("idx_posts_author_id", table_name="posts")
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_table("posts")
    op.drop_table("users")
