"""
Agora Backend — Authorization Policy Unit Tests
=================================================

What:  require_identity and ensure_owner, against unsaved User objects.
"""

import pytest

from app.exceptions import ForbiddenError, UnauthorizedError
from app.models.user import User
from app.services.authorization import ensure_owner, require_identity


def _user(user_id: int) -> User:
    return User(id=user_id, username=f"user{user_id}", email=f"u{user_id}@example.com",
                password="x", full_name="Some One")


class TestRequireIdentity:

    def test_anonymous_is_rejected(self):
        with pytest.raises(UnauthorizedError, match="No token provided"):
            require_identity(None)

    def test_identity_passes_through(self):
        user = _user(1)
        assert require_identity(user) is user


class TestEnsureOwner:

    def test_owner_allowed(self):
        user = _user(3)
        assert ensure_owner(user, 3, resource="post", action="update") is user

    def test_non_owner_forbidden(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_owner(_user(3), 4, resource="post", action="delete")
        assert exc_info.value.message == "You are not authorized to delete this post"
        assert exc_info.value.status_code == 403

    def test_comment_message(self):
        with pytest.raises(ForbiddenError, match="update this comment"):
            ensure_owner(_user(1), 2, resource="comment", action="update")

    def test_anonymous_is_unauthorized_not_forbidden(self):
        with pytest.raises(UnauthorizedError):
            ensure_owner(None, 1, resource="post", action="update")
