"""
Agora Backend — Credential Manager Unit Tests
===============================================

What:  Password hashing/verification and token issue/verify.
How:   A CredentialManager with 4 bcrypt rounds and a throwaway secret;
       no database involved.
"""

from datetime import timedelta

import jwt
import pytest

from app.exceptions import ExpiredTokenError, InvalidTokenError, UnauthorizedError
from app.services.credentials import CredentialManager


class TestPasswordHashing:

    def setup_method(self):
        self.manager = CredentialManager(secret="unit-test-secret", bcrypt_rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.manager.hash_password("secret1")
        assert hashed != "secret1"
        assert "secret1" not in hashed
        assert hashed.startswith("$2")

    def test_same_password_hashes_differently(self):
        """bcrypt salts every hash."""
        assert self.manager.hash_password("secret1") != self.manager.hash_password("secret1")

    def test_verify_correct_password(self):
        hashed = self.manager.hash_password("secret1")
        assert self.manager.verify_password("secret1", hashed) is True

    def test_verify_wrong_password(self):
        hashed = self.manager.hash_password("secret1")
        assert self.manager.verify_password("secret2", hashed) is False

    def test_verify_against_malformed_hash(self):
        assert self.manager.verify_password("secret1", "not-a-hash") is False


class TestTokens:

    def setup_method(self):
        self.manager = CredentialManager(secret="unit-test-secret", bcrypt_rounds=4)

    def test_round_trip_returns_user_id(self):
        token = self.manager.issue_token(42)
        assert self.manager.verify_token(token) == 42

    def test_subject_is_a_string_claim(self):
        token = self.manager.issue_token(7)
        payload = jwt.decode(token, "unit-test-secret", algorithms=["HS256"])
        assert payload["sub"] == "7"
        assert payload["exp"] > payload["iat"]

    def test_expired_token(self):
        token = self.manager.issue_token(1, expires_delta=timedelta(seconds=-5))
        with pytest.raises(ExpiredTokenError, match="Token expired"):
            self.manager.verify_token(token)

    def test_token_signed_with_other_secret(self):
        other = CredentialManager(secret="another-secret", bcrypt_rounds=4)
        with pytest.raises(InvalidTokenError):
            self.manager.verify_token(other.issue_token(1))

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError, match="Invalid token"):
            self.manager.verify_token("not.a.jwt")

    def test_non_numeric_subject(self):
        token = jwt.encode({"sub": "alice", "exp": 9999999999}, "unit-test-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            self.manager.verify_token(token)

    def test_missing_subject(self):
        token = jwt.encode({"exp": 9999999999}, "unit-test-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            self.manager.verify_token(token)

    def test_token_errors_are_unauthorized(self):
        """Both token failures surface as 401s."""
        assert issubclass(ExpiredTokenError, UnauthorizedError)
        assert issubclass(InvalidTokenError, UnauthorizedError)
        assert InvalidTokenError.status_code == 401
