"""Authentication schemas."""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from fleamarket.services.passwords import MAX_PASSWORD_BYTES, password_too_long


class Credentials(BaseModel):
    """Email and password pair.

    The email is checked for validity but kept exactly as sent; lookups are
    case-sensitive on the stored value.
    """

    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from None
        return value

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        if password_too_long(value):
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserSignup(Credentials):
    """User signup request."""


class UserLogin(Credentials):
    """User login request."""


class TokenResponse(BaseModel):
    """Session token returned by login."""

    token: str
    token_type: str = "bearer"  # noqa: S105


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
