"""
Agora Backend — Repositories (Entity Store)
============================================

What:  One repository per entity, each bound to an explicit AsyncSession.
Why:   Services never query through a global model registry or an implicit
       connection; the request's session is handed in at construction.

Repository Inventory:
    - UserRepository:     users, plus the user cascade delete
    - PostRepository:     posts, post+author+counts read models, post cascade delete
    - CommentRepository:  comments, comment+author read models
    - LikeRepository:     likes, like+user and like+post read models
"""

from app.repositories.user_repository import UserRepository
from app.repositories.post_repository import PostRepository, PostWithStats
from app.repositories.comment_repository import CommentRepository
from app.repositories.like_repository import LikeRepository, LikedPost

__all__ = [
    "UserRepository",
    "PostRepository",
    "PostWithStats",
    "CommentRepository",
    "LikeRepository",
    "LikedPost",
]
