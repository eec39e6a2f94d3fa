"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.api.dependencies import AuthContext, get_auth_context, get_current_user, get_user_service
from src.models.user import User
from src.schemas.auth import MessageResponse
from src.schemas.user import UserResponse
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1", tags=["users"])


@router.get("/user", response_model=UserResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the authenticated user's profile."""
    return current_user


@router.put("/user", response_model=UserResponse)
def update_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
    name: Annotated[str | None, Form()] = None,
    nickname: Annotated[str | None, Form(alias="nickName")] = None,
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    avatar: Annotated[UploadFile | None, File(description="New avatar image")] = None,
):
    """Update profile fields and optionally replace the avatar."""
    submitted = {"name": name, "nickname": nickname, "email": email, "password": password}
    fields = {key: value for key, value in submitted.items() if value is not None}
    return users.update_profile(current_user.id, fields, avatar)


@router.delete("/user", response_model=MessageResponse)
def delete_account(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Delete the authenticated user's account and revoke their token."""
    message = users.delete_account(auth.user.id, auth.token)
    return MessageResponse(message=message)


@router.put("/user/avatar", response_model=UserResponse)
def update_avatar(
    avatar: Annotated[UploadFile, File(description="Avatar image (JPEG, PNG, GIF, or WebP)")],
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Replace the authenticated user's avatar."""
    return users.update_avatar(current_user.id, avatar)


@router.delete("/user/avatar", response_model=UserResponse)
def delete_avatar(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Reset the authenticated user's avatar to the default image."""
    return users.delete_avatar(current_user.id)


@router.get("/users", response_model=list[UserResponse])
def get_users(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get all users."""
    return users.list_users()


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user's public profile."""
    return users.get_user(user_id)


@router.post("/users/{user_id}/follow", response_model=UserResponse)
def follow_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Follow another user."""
    return users.follow(current_user.id, user_id)


@router.delete("/users/{user_id}/follow", response_model=UserResponse)
def unfollow_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Stop following another user."""
    return users.unfollow(current_user.id, user_id)
