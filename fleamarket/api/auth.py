"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from fleamarket.api.dependencies import get_auth_service, get_current_user
from fleamarket.models.user import User
from fleamarket.schemas.auth import TokenResponse, UserLogin, UserResponse, UserSignup
from fleamarket.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    return auth_service.signup(user_data.email, user_data.password)


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    token = auth_service.login(credentials.email, credentials.password)
    return TokenResponse(token=token)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
