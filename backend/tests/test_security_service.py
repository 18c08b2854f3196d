"""
FWRCFN Backend — Credential Service Unit Tests
================================================

What we test:
    ✅ bcrypt hashes verify against the original password only
    ✅ Hashes are salted (same password, different hash)
    ✅ Malformed stored hashes verify as False
    ✅ Issued tokens decode to the user id and role
    ✅ Expired and tampered tokens are rejected
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from fwrcfn.config import settings
from fwrcfn.exceptions import InvalidTokenError
from fwrcfn.services.security_service import SecurityService


class TestPasswordHashing:

    def setup_method(self):
        self.service = SecurityService(rounds=4)

    @pytest.mark.asyncio
    async def test_hash_verifies_original_password(self):
        hashed = await self.service.hash_password("s3cret")

        assert hashed != "s3cret"
        assert hashed.startswith("$2")
        assert await self.service.verify_password("s3cret", hashed) is True

    @pytest.mark.asyncio
    async def test_wrong_password_does_not_verify(self):
        hashed = await self.service.hash_password("s3cret")
        assert await self.service.verify_password("S3cret", hashed) is False

    def test_hashes_are_salted(self):
        first = self.service.hash_password_sync("same-password")
        second = self.service.hash_password_sync("same-password")
        assert first != second

    def test_configured_cost_factor_is_used(self):
        hashed = SecurityService(rounds=5).hash_password_sync("pw")
        assert hashed.split("$")[2] == "05"

    def test_malformed_hash_is_rejected(self):
        assert self.service.verify_password_sync("pw", "not-a-bcrypt-hash") is False

    def test_long_passwords_compare_on_first_72_bytes(self):
        base = "x" * 72
        hashed = self.service.hash_password_sync(base + "tail-one")
        assert self.service.verify_password_sync(base + "tail-two", hashed) is True


class TestTokens:

    def setup_method(self):
        self.service = SecurityService(rounds=4)

    def test_token_round_trip(self):
        token = self.service.issue_token("665f1c2ab3", "volunteer")
        claims = self.service.decode_token(token)

        assert claims.user_id == "665f1c2ab3"
        assert claims.role == "volunteer"

    def test_token_expires_after_configured_days(self):
        now = datetime.now(timezone.utc).replace(microsecond=0)
        claims = self.service.decode_token(self.service.issue_token("u1", "user", now=now))

        assert claims.issued_at == now
        assert claims.expires_at - claims.issued_at == timedelta(days=settings.jwt_expires_days)

    def test_payload_nests_user_claim(self):
        token = self.service.issue_token("u1", "admin")
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        assert payload["user"] == {"id": "u1", "role": "admin"}

    def test_expired_token_is_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(days=settings.jwt_expires_days + 1)
        token = self.service.issue_token("u1", "user", now=issued)

        with pytest.raises(InvalidTokenError) as excinfo:
            self.service.decode_token(token)
        assert excinfo.value.message == "Token has expired"

    def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode(
            {"user": {"id": "u1", "role": "admin"}, "iat": 0, "exp": 4102444800},
            "some-other-secret-that-is-long-enough-000",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            self.service.decode_token(token)

    def test_token_without_user_claim_is_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "u1", "iat": now, "exp": now + timedelta(days=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            self.service.decode_token(token)

    def test_garbage_is_rejected(self):
        with pytest.raises(InvalidTokenError):
            self.service.decode_token("not.a.token")
