"""Asset and comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AssetCreate(BaseModel):
    """Create a new asset.

    Name and description are checked by the asset service so that every
    violated rule is reported together.
    """

    name: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    image: str | None = Field(None, max_length=255)
    is_public: bool = False


class AssetUpdate(BaseModel):
    """Update an asset. Only the fields sent are replaced."""

    name: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    image: str | None = Field(None, max_length=255)
    is_public: bool | None = None


class CommentCreate(BaseModel):
    """Comment on an asset."""

    text: str | None = None


class CommentResponse(BaseModel):
    """Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    author_id: int
    asset_id: int
    created_at: datetime


class AssetResponse(BaseModel):
    """Asset response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    image: str
    owner_id: int
    slug: str | None
    is_public: bool
    tags: list[str]
    likes: list[int]
    comments: list[CommentResponse]
    created_at: datetime
    updated_at: datetime


class AssetEnvelope(BaseModel):
    """Single asset wrapped with a success flag."""

    success: bool = True
    asset: AssetResponse


class AssetDataEnvelope(BaseModel):
    """Mutated asset wrapped with a success flag."""

    success: bool = True
    data: AssetResponse
