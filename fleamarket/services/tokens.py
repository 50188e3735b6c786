"""Signed, time-bounded session tokens."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from fleamarket.errors import ConfigurationError, InvalidTokenError

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class TokenClaims:
    """Identity recovered from a verified token."""

    user_id: int
    email: str


class TokenCodec:
    """Issue and verify JWT session tokens signed with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = DEFAULT_TTL):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, email: str) -> str:
        """Create a token for the given user."""
        if not self.secret:
            raise ConfigurationError("JWT signing secret is not configured")
        now = datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry and return the encoded identity.

        Every failure raises the same :class:`InvalidTokenError`; the cause
        is only logged.
        """
        if not self.secret:
            raise ConfigurationError("JWT signing secret is not configured")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.debug("Rejected token: expired")
            raise InvalidTokenError() from None
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidTokenError() from None

        # jose accepts a token up to the exact expiry second; we do not
        exp = payload.get("exp")
        if not isinstance(exp, int | float) or exp <= datetime.now(UTC).timestamp():
            logger.debug("Rejected token: missing or reached expiry")
            raise InvalidTokenError()

        email = payload.get("email")
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            logger.debug("Rejected token: malformed subject")
            raise InvalidTokenError() from None
        if not isinstance(email, str):
            logger.debug("Rejected token: missing email claim")
            raise InvalidTokenError()

        return TokenClaims(user_id=user_id, email=email)
