"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.user import UserResponse


class UserRegister(BaseModel):
    """User registration request.

    Fields are optional here; the user service validates them in a fixed
    order and reports every violated rule.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password: str | None = None
    nickname: str | None = Field(None, alias="nickName", max_length=100)


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    user: UserResponse
    token: str
    token_type: str = "bearer"  # noqa: S105


class MessageResponse(BaseModel):
    success: bool = True
    message: str
