"""User schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """User information response. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    nickname: str = Field(
        validation_alias=AliasChoices("nickname", "nickName"),
        serialization_alias="nickName",
    )
    email: str
    avatar: str
    follower_ids: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("follower_ids", "followers"),
        serialization_alias="followers",
    )
    created_at: datetime
