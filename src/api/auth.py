"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import AuthContext, get_auth_context, get_current_user, get_user_service
from src.models.user import User
from src.schemas.auth import AuthResponse, MessageResponse, UserLogin, UserRegister
from src.schemas.user import UserResponse
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
def register(
    user_data: UserRegister,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    user, token = users.register(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        nickname=user_data.nickname,
    )
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    user, token = users.login(credentials.email, credentials.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/user", response_model=UserResponse)
def get_authenticated_user(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/logout", response_model=MessageResponse)
def logout(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Logout by revoking the presented token."""
    users.logout(auth.token)
    return MessageResponse(message="Logged out successfully")
