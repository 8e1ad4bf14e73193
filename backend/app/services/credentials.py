"""
Agora Backend — Credential Manager
====================================

What:  Password hashing/verification and access-token issuance/validation.
How:   - Passwords: passlib CryptContext with bcrypt (salted, one-way).
       - Tokens:    PyJWT, HS256, signed with settings.jwt_secret, carrying
                    `sub` (user id as string), `iat` and `exp`.
Who:   AuthService (register, login, change password) and the auth
       dependencies in app/dependencies.py.

Tokens are stateless: there is no server-side session store, so a token is
valid until it expires, regardless of logout.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from app.config import settings
from app.exceptions import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)


class CredentialManager:
    """
    Hashes passwords and signs/verifies access tokens.

    Every code path that stores a password calls `hash_password` first;
    the User model has no save hook that would do it implicitly.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
        bcrypt_rounds: Optional[int] = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expire_minutes = expire_minutes or settings.jwt_expire_minutes
        self._pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=bcrypt_rounds or settings.bcrypt_rounds,
        )

    # ── Passwords ─────────────────────────────────────────────────────────

    def hash_password(self, plaintext: str) -> str:
        return self._pwd_context.hash(plaintext)

    def verify_password(self, plaintext: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        A stored value that is not a recognizable hash yields False rather
        than an error; passlib compares digests in constant time.
        """
        try:
            return self._pwd_context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False

    # ── Tokens ────────────────────────────────────────────────────────────

    def issue_token(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        expires_at = now + (expires_delta or timedelta(minutes=self.expire_minutes))
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": expires_at,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> int:
        """
        Validate a token and return the user id it was issued for.

        Raises:
            ExpiredTokenError: signature valid, `exp` in the past
            InvalidTokenError: anything else (bad signature, malformed token,
                               missing or non-numeric subject)
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(context={"reason": type(e).__name__}) from e

        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError(context={"reason": "non-numeric subject"}) from e


# ── Singleton Instance ────────────────────────────────────────────────────
credential_manager = CredentialManager()
