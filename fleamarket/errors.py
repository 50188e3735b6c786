"""Classified errors raised by the service layer.

Every failure that can reach a client is one of these. The HTTP layer maps
``kind`` to a status code and responds with ``public_message`` only, so no
lower-layer detail ends up in a response body.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a service failure."""

    VALIDATION = "validation"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base class for classified service errors."""

    kind: ErrorKind = ErrorKind.INTERNAL
    public_message: str = "Unexpected error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class HashingError(ServiceError):
    """The password hashing primitive failed."""


class ConfigurationError(ServiceError):
    """Required configuration is absent or invalid. Not recoverable per request."""


class InvalidTokenError(ServiceError):
    """A session token failed signature, structure or expiry checks."""

    kind = ErrorKind.UNAUTHENTICATED
    public_message = "Invalid authentication credentials"


class InvalidCredentialsError(ServiceError):
    """Login or token resolution failed. Never says which part was wrong."""

    kind = ErrorKind.UNAUTHENTICATED
    public_message = "Invalid authentication credentials"


class DuplicateAccountError(ServiceError):
    """The store rejected a signup because the email is already registered."""

    kind = ErrorKind.CONFLICT
    public_message = "Email already registered"


class ListingNotFoundError(ServiceError):
    """The listing does not exist or is not owned by the acting user."""

    kind = ErrorKind.NOT_FOUND
    public_message = "Item not found"
