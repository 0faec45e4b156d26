from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Union
import uuid

from jose import jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from pathwise.core.config import Settings, settings
from pathwise.core.exceptions import (
    ConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
)
from pathwise.schemas.token import IssuedSession, TokenPayload

SESSION_TOKEN_TYPE = "session"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plain password against its hash. Malformed hashes never match."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Generate password hash from plain password."""
    return pwd_context.hash(password)


def dummy_verify() -> None:
    """Spend the same time as a real verify so unknown emails are not observable."""
    pwd_context.dummy_verify()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionIssuer:
    """Signs and validates session tokens.

    Built once at startup from the application settings. ``now`` is injectable
    so expiry can be exercised against a simulated clock.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(days=7),
        now: Callable[[], datetime] = _utc_now,
    ):
        if not secret:
            raise ConfigurationError("JWT_SECRET_KEY is not set")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime
        self._now = now

    @classmethod
    def from_settings(cls, config: Settings) -> "SessionIssuer":
        return cls(
            secret=config.JWT_SECRET_KEY,
            algorithm=config.ALGORITHM,
            lifetime=timedelta(days=config.SESSION_EXPIRE_DAYS),
        )

    def issue(self, subject: Union[str, Any]) -> IssuedSession:
        """Create a session token for the given user id."""
        current_time = self._now()
        expire = current_time + self._lifetime

        to_encode = {
            "sub": str(subject),
            "type": SESSION_TOKEN_TYPE,
            "iat": int(current_time.timestamp()),
            "exp": int(expire.timestamp()),
            "jti": str(uuid.uuid4()),
        }
        token = jwt.encode(to_encode, self._secret, algorithm=self._algorithm)
        return IssuedSession(token=token, expires_at=expire)

    def validate(self, token: str) -> str:
        """Verify signature and expiry, returning the user id."""
        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
            token_data = TokenPayload(**payload)
        except (jwt.JWTError, ValidationError) as e:
            raise InvalidTokenError() from e

        if token_data.type != SESSION_TOKEN_TYPE:
            raise InvalidTokenError()

        exp_time = datetime.fromtimestamp(token_data.exp, tz=timezone.utc)
        if self._now() >= exp_time:
            raise ExpiredTokenError()

        return token_data.sub
