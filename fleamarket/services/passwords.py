"""Password hashing with bcrypt."""

import logging

from passlib.context import CryptContext

from fleamarket.errors import HashingError

logger = logging.getLogger(__name__)

# bcrypt reads at most this many bytes of input
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    """Check whether a password exceeds what bcrypt can digest in full."""
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


class PasswordHasher:
    """Salted, adaptive one-way hashing of passwords.

    Every call to :meth:`hash` draws a fresh salt, so hashing the same
    password twice yields two different digests that both verify. Input
    longer than 72 bytes is refused rather than truncated.
    """

    def __init__(self, schemes: list[str] | None = None):
        self.context = CryptContext(
            schemes=schemes or ["bcrypt"], deprecated="auto", bcrypt__truncate_error=True
        )
        self._dummy_digest: str | None = None

    def hash(self, password: str) -> str:
        """Hash a password."""
        if password_too_long(password):
            raise HashingError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
        try:
            return self.context.hash(password)
        except (ValueError, MemoryError) as e:
            raise HashingError(f"password hashing failed: {type(e).__name__}") from e

    def verify(self, password: str, digest: str) -> bool:
        """Verify a password against its digest.

        A malformed or unrecognised digest is reported as a non-match, as is
        a password too long to have been hashed.
        """
        if password_too_long(password):
            return False
        try:
            return self.context.verify(password, digest)
        except (ValueError, TypeError):
            logger.debug("Stored digest could not be parsed, treating as mismatch")
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend one verify's worth of work against a throwaway digest.

        Used when there is no stored digest to check, so the caller's
        failure path costs the same as a real mismatch. The digest is made
        once per hasher.
        """
        if self._dummy_digest is None:
            self._dummy_digest = self.context.hash("timing-equalizer")
        self.verify(password, self._dummy_digest)
        return False
