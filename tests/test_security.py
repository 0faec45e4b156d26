"""
Tests for password hashing and session token issuance.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from pathwise.core.config import settings
from pathwise.core.exceptions import ConfigurationError, ExpiredTokenError, InvalidTokenError
from pathwise.core.security import (
    SessionIssuer,
    get_password_hash,
    verify_password,
)


class FakeClock:
    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def issuer(clock):
    return SessionIssuer(secret="unit-test-secret", now=clock)


# ============================================================================
# PASSWORD HASHER
# ============================================================================

class TestPasswordHasher:
    def test_hash_is_salted(self):
        first = get_password_hash("correct horse")
        second = get_password_hash("correct horse")
        assert first != second
        assert verify_password("correct horse", first)
        assert verify_password("correct horse", second)

    def test_uses_configured_work_factor(self):
        hashed = get_password_hash("correct horse")
        assert hashed.startswith("$2b$10$")
        assert settings.BCRYPT_ROUNDS == 10

    def test_wrong_password_does_not_verify(self):
        hashed = get_password_hash("correct horse")
        assert verify_password("battery staple", hashed) is False

    @pytest.mark.parametrize("bad_hash", ["", None, "not-a-bcrypt-hash", "$2b$10$short"])
    def test_malformed_hash_returns_false(self, bad_hash):
        assert verify_password("anything", bad_hash) is False


# ============================================================================
# SESSION ISSUER
# ============================================================================

class TestSessionIssuer:
    def test_missing_secret_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            SessionIssuer(secret="")

    def test_token_validates_back_to_user(self, issuer):
        session = issuer.issue("user-123")
        assert issuer.validate(session.token) == "user-123"

    def test_expiry_is_seven_days_from_issue(self, issuer, clock):
        session = issuer.issue("user-123")
        assert session.expires_at == clock.current + timedelta(days=7)

    def test_token_valid_just_before_expiry(self, issuer, clock):
        session = issuer.issue("user-123")
        clock.advance(timedelta(days=7) - timedelta(seconds=1))
        assert issuer.validate(session.token) == "user-123"

    def test_token_expires_after_horizon(self, issuer, clock):
        session = issuer.issue("user-123")
        clock.advance(timedelta(days=7, seconds=1))
        with pytest.raises(ExpiredTokenError):
            issuer.validate(session.token)

    def test_tampered_token_is_invalid(self, issuer):
        token = issuer.issue("user-123").token
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(InvalidTokenError):
            issuer.validate(tampered)

    def test_token_from_other_secret_is_invalid(self, issuer, clock):
        other = SessionIssuer(secret="another-secret", now=clock)
        with pytest.raises(InvalidTokenError):
            issuer.validate(other.issue("user-123").token)

    def test_garbage_is_invalid(self, issuer):
        with pytest.raises(InvalidTokenError):
            issuer.validate("not.a.jwt")

    def test_wrong_token_type_is_invalid(self, issuer, clock):
        now = int(clock.current.timestamp())
        token = jwt.encode(
            {"sub": "user-123", "type": "refresh", "iat": now, "exp": now + 60, "jti": "x"},
            "unit-test-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            issuer.validate(token)

    def test_expired_and_invalid_are_distinguishable(self, issuer, clock):
        token = issuer.issue("user-123").token
        clock.advance(timedelta(days=8))
        with pytest.raises(ExpiredTokenError) as exc_info:
            issuer.validate(token)
        assert not isinstance(exc_info.value, InvalidTokenError)
