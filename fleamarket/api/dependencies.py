"""FastAPI dependencies for authentication and storage."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fleamarket.config import Settings
from fleamarket.database import get_db
from fleamarket.errors import InvalidCredentialsError
from fleamarket.models.user import User
from fleamarket.services.accounts import AccountDirectory
from fleamarket.services.auth import AuthService
from fleamarket.services.listings import ListingRepository, SqlListingRepository
from fleamarket.services.passwords import PasswordHasher
from fleamarket.services.tokens import TokenCodec

logger = logging.getLogger(__name__)

# Missing or non-Bearer headers arrive as None; get_current_user answers 401
security = HTTPBearer(auto_error=False)

password_hasher = PasswordHasher()


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_codec(request: Request) -> TokenCodec:
    """Get token codec configured from the application settings."""
    settings: Settings = request.app.state.settings
    return TokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_expiration_minutes),
    )


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(AccountDirectory(db), password_hasher, tokens)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from the bearer token.

    Short-circuits with 401 before the route handler runs when the header is
    missing, is not a Bearer credential, or does not resolve to a user.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized()

    try:
        user = auth_service.resolve_from_token(credentials.credentials)
    except InvalidCredentialsError:
        logger.info(f"Rejected bearer token on {request.method} {request.url.path}")
        raise _unauthorized() from None

    request.state.user = user
    return user


def get_listing_repository(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> ListingRepository:
    """Get the listing backend selected at startup."""
    memory_repository = getattr(request.app.state, "listing_repository", None)
    if memory_repository is not None:
        return memory_repository
    return SqlListingRepository(db)
