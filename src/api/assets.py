"""Asset API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_asset_service, get_current_user
from src.models.user import User
from src.schemas.asset import (
    AssetCreate,
    AssetDataEnvelope,
    AssetEnvelope,
    AssetResponse,
    AssetUpdate,
    CommentCreate,
)
from src.services.asset_service import AssetService

router = APIRouter(prefix="/api/v1/assets", tags=["assets"])


@router.get("", response_model=list[AssetResponse])
def get_assets(
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Get all assets."""
    return assets.list_all()


@router.get("/tags", response_model=list[str])
def get_tags(
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Get every distinct tag used by any asset."""
    return assets.list_all_tags()


@router.get("/tags/{tag}", response_model=list[AssetResponse])
def get_assets_by_tag(
    tag: str,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Get assets carrying a tag."""
    return assets.list_by_tag(tag)


@router.get("/user/{user_id}", response_model=list[AssetResponse])
def get_assets_by_owner(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Get assets owned by a user."""
    return assets.list_by_owner(user_id)


@router.get("/{asset_id}", response_model=AssetEnvelope)
def get_asset(
    asset_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Get a specific asset."""
    return AssetEnvelope(asset=AssetResponse.model_validate(assets.get(asset_id)))


@router.post("", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
def create_asset(
    asset_data: AssetCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Create a new asset owned by the current user."""
    return assets.create(
        owner_id=current_user.id,
        name=asset_data.name,
        description=asset_data.description,
        tags=asset_data.tags,
        image=asset_data.image,
        is_public=asset_data.is_public,
    )


@router.put("/{asset_id}", response_model=AssetDataEnvelope)
def update_asset(
    asset_id: int,
    asset_data: AssetUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Update an asset owned by the current user."""
    asset = assets.update(asset_id, current_user.id, asset_data.model_dump(exclude_unset=True))
    return AssetDataEnvelope(data=AssetResponse.model_validate(asset))


@router.delete("/{asset_id}", response_model=AssetEnvelope)
def delete_asset(
    asset_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Delete an asset owned by the current user."""
    return AssetEnvelope(asset=assets.delete(asset_id, current_user.id))


# --- Comments ---


@router.post("/{asset_id}/comments", response_model=AssetDataEnvelope)
def add_comment(
    asset_id: int,
    comment_data: CommentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Comment on an asset. The newest comment comes first."""
    asset = assets.add_comment(asset_id, current_user.id, comment_data.text)
    return AssetDataEnvelope(data=AssetResponse.model_validate(asset))


@router.delete("/{asset_id}/comments/{comment_id}", response_model=AssetDataEnvelope)
def remove_comment(
    asset_id: int,
    comment_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Remove a comment written by the current user."""
    asset = assets.remove_comment(asset_id, comment_id, current_user.id)
    return AssetDataEnvelope(data=AssetResponse.model_validate(asset))


# --- Likes ---


@router.post("/{asset_id}/likes", response_model=AssetDataEnvelope)
def like_asset(
    asset_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Like an asset."""
    asset = assets.add_like(asset_id, current_user.id)
    return AssetDataEnvelope(data=AssetResponse.model_validate(asset))


@router.delete("/{asset_id}/likes", response_model=AssetDataEnvelope)
def unlike_asset(
    asset_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    assets: Annotated[AssetService, Depends(get_asset_service)],
):
    """Remove the current user's like from an asset."""
    asset = assets.remove_like(asset_id, current_user.id)
    return AssetDataEnvelope(data=AssetResponse.model_validate(asset))
