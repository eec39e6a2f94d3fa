"""Pydantic schemas for request/response validation."""

from src.schemas.asset import (
    AssetCreate,
    AssetDataEnvelope,
    AssetEnvelope,
    AssetResponse,
    AssetUpdate,
    CommentCreate,
    CommentResponse,
)
from src.schemas.auth import AuthResponse, MessageResponse, UserLogin, UserRegister
from src.schemas.user import UserResponse

__all__ = [
    "AssetCreate",
    "AssetUpdate",
    "AssetResponse",
    "AssetEnvelope",
    "AssetDataEnvelope",
    "CommentCreate",
    "CommentResponse",
    "AuthResponse",
    "MessageResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
