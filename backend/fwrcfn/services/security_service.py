"""
FWRCFN Backend — Credential Service
=====================================

What:  Password hashing/verification and signed session tokens.
How:   bcrypt for salted one-way hashes, PyJWT (HMAC) for tokens.
Who:   Called by UserService during registration and login.

Token payload:
    {
        "user": {"id": "<user id>", "role": "user"},
        "iat": 1718000000,
        "exp": 1718604800          ← iat + 7 days by default
    }

bcrypt only looks at the first 72 bytes of a password. Longer passwords are
truncated before hashing and verification so both sides agree.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from fwrcfn.config import settings
from fwrcfn.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


class TokenClaims(BaseModel):
    """Verified contents of a session token."""

    user_id: str
    role: str
    issued_at: datetime
    expires_at: datetime


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class SecurityService:
    """
    Stateless credential helpers.

    Hashing and verification are CPU-bound (tens of milliseconds at cost 10),
    so the async variants run them in Starlette's threadpool to keep the
    event loop free for other requests.
    """

    def __init__(self, rounds: Optional[int] = None):
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds or settings.bcrypt_rounds

    # ── Passwords ─────────────────────────────────────────────────────────

    def hash_password_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify_password_sync(self, password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(password), hashed_password.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("Password verification against a malformed hash")
            return False

    async def hash_password(self, password: str) -> str:
        """One-way salted hash of `password`."""
        return await run_in_threadpool(self.hash_password_sync, password)

    async def verify_password(self, password: str, hashed_password: str) -> bool:
        """Constant-time comparison of `password` against a stored hash."""
        return await run_in_threadpool(self.verify_password_sync, password, hashed_password)

    # ── Tokens ────────────────────────────────────────────────────────────

    def issue_token(self, user_id: str, role: str, now: Optional[datetime] = None) -> str:
        """
        Sign a session token carrying the user's id and role.

        Args:
            user_id: String form of the user's document id
            role: The user's role value
            now: Issue time (defaults to the current UTC time)

        Returns:
            Compact JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "user": {"id": user_id, "role": role},
            "iat": issued_at,
            "exp": issued_at + timedelta(days=settings.jwt_expires_days),
        }
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def decode_token(self, token: str) -> TokenClaims:
        """
        Verify a token's signature and expiry and return its claims.

        Raises:
            InvalidTokenError: bad signature, expired, or malformed payload
        """
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError(message="Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(context={"error_type": type(e).__name__})

        user = payload.get("user")
        if not isinstance(user, dict) or "id" not in user or "role" not in user:
            raise InvalidTokenError(context={"error_type": "MissingUserClaim"})

        return TokenClaims(
            user_id=str(user["id"]),
            role=str(user["role"]),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


security_service = SecurityService()
