"""
Agora Backend — ORM Models
===========================

Importing this package registers every table on `Base.metadata`
(used by Alembic autogenerate and `create_all_tables()`).
"""

from app.models.user import User
from app.models.post import Post
from app.models.comment import Comment
from app.models.like import Like

__all__ = ["User", "Post", "Comment", "Like"]
