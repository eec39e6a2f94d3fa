"""Asset service: ownership-checked CRUD plus likes and comments."""

import logging
from typing import Any

from sqlalchemy import delete, exists, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.asset import NAME_MAX_LENGTH, Asset, AssetTag, asset_likes
from src.models.comment import TEXT_MAX_LENGTH, TEXT_MIN_LENGTH, Comment
from src.schemas.asset import AssetResponse
from src.services.exceptions import (
    AlreadyLiked,
    NotFound,
    NotLiked,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "tags", "image", "is_public")


def clean_tags(tags: list[str] | None) -> list[str]:
    """Strip tags and drop the blank ones, keeping order and repeats."""
    if not tags:
        return []
    return [tag.strip() for tag in tags if tag and tag.strip()]


def validate_asset_fields(name: str | None, description: str | None) -> list[str]:
    errors = []
    if not name or not name.strip():
        errors.append("Please add a name")
    elif len(name.strip()) > NAME_MAX_LENGTH:
        errors.append(f"Name can not be more than {NAME_MAX_LENGTH} characters")
    if not description or not description.strip():
        errors.append("Please add a description")
    return errors


def validate_comment_text(text: str | None) -> None:
    if not text or not text.strip():
        raise ValidationError("Please provide a comment.")
    if len(text) < TEXT_MIN_LENGTH:
        raise ValidationError(f"Your comment should have at least {TEXT_MIN_LENGTH} characters.")
    if len(text) > TEXT_MAX_LENGTH:
        raise ValidationError(f"Your comment should not exceed {TEXT_MAX_LENGTH} characters.")


class AssetService:
    """Service for asset-related operations.

    Likes and comments are written as single rows rather than by rewriting
    the asset, so concurrent requests on the same asset cannot overwrite each
    other's changes.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, asset_id: int) -> Asset:
        asset = self.db.query(Asset).filter(Asset.id == asset_id).first()
        if asset is None:
            raise NotFound(f"Asset not found with id of {asset_id}")
        return asset

    def list_all(self) -> list[Asset]:
        return self.db.query(Asset).order_by(Asset.id).all()

    def list_by_owner(self, owner_id: int) -> list[Asset]:
        return self.db.query(Asset).filter(Asset.owner_id == owner_id).order_by(Asset.id).all()

    def list_by_tag(self, tag: str) -> list[Asset]:
        tagged = select(AssetTag.asset_id).where(AssetTag.tag == tag)
        return self.db.query(Asset).filter(Asset.id.in_(tagged)).order_by(Asset.id).all()

    def list_all_tags(self) -> list[str]:
        rows = self.db.query(AssetTag.tag).distinct().order_by(AssetTag.tag).all()
        return [tag for (tag,) in rows]

    def create(
        self,
        owner_id: int,
        name: str | None,
        description: str | None,
        tags: list[str] | None = None,
        image: str | None = None,
        is_public: bool = False,
    ) -> Asset:
        errors = validate_asset_fields(name, description)
        if errors:
            raise ValidationError(errors)

        asset = Asset(
            name=name.strip(),
            description=description,
            owner_id=owner_id,
            is_public=is_public,
        )
        if image:
            asset.image = image
        asset.tags = clean_tags(tags)

        self.db.add(asset)
        self.db.commit()
        self.db.refresh(asset)
        logger.info(f"User {owner_id} created asset {asset.id} ({asset.slug})")
        return asset

    def update(self, asset_id: int, requester_id: int, fields: dict[str, Any]) -> Asset:
        """Replace the given fields of an asset owned by the requester.

        A null ``tags`` leaves the tags as they are; an empty list clears them.
        """
        asset = self.get(asset_id)
        if asset.owner_id != requester_id:
            raise Unauthorized(f"User {requester_id} is not authorized to update this asset")

        changes = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
        name = changes.get("name", asset.name)
        description = changes.get("description", asset.description)
        errors = validate_asset_fields(name, description)
        if errors:
            raise ValidationError(errors)

        asset.name = name.strip()
        asset.description = description
        if changes.get("tags") is not None:
            asset.tags = clean_tags(changes["tags"])
        if changes.get("image"):
            asset.image = changes["image"]
        if changes.get("is_public") is not None:
            asset.is_public = changes["is_public"]

        self.db.commit()
        self.db.refresh(asset)
        logger.info(f"User {requester_id} updated asset {asset.id}")
        return asset

    def delete(self, asset_id: int, requester_id: int) -> AssetResponse:
        """Delete an asset owned by the requester and return what it was."""
        asset = self.get(asset_id)
        if asset.owner_id != requester_id:
            raise Unauthorized(f"User {requester_id} is not authorized to delete this asset")

        snapshot = AssetResponse.model_validate(asset)
        self.db.delete(asset)
        self.db.commit()
        logger.info(f"User {requester_id} deleted asset {asset_id}")
        return snapshot

    def add_comment(self, asset_id: int, author_id: int, text: str | None) -> Asset:
        asset = self.get(asset_id)
        validate_comment_text(text)

        self.db.add(Comment(asset_id=asset.id, author_id=author_id, text=text))
        self.db.commit()
        self.db.refresh(asset)
        logger.info(f"User {author_id} commented on asset {asset_id}")
        return asset

    def remove_comment(self, asset_id: int, comment_id: int, requester_id: int) -> Asset:
        asset = self.get(asset_id)
        comment = (
            self.db.query(Comment)
            .filter(Comment.id == comment_id, Comment.asset_id == asset.id)
            .first()
        )
        if comment is None:
            raise NotFound("Comment does not exist")
        if comment.author_id != requester_id:
            raise Unauthorized("User not authorized")

        self.db.delete(comment)
        self.db.commit()
        self.db.refresh(asset)
        logger.info(f"User {requester_id} removed comment {comment_id} from asset {asset_id}")
        return asset

    def has_liked(self, asset_id: int, user_id: int) -> bool:
        query = select(
            exists().where(asset_likes.c.asset_id == asset_id, asset_likes.c.user_id == user_id)
        )
        return bool(self.db.execute(query).scalar())

    def add_like(self, asset_id: int, user_id: int) -> Asset:
        asset = self.get(asset_id)
        if self.has_liked(asset.id, user_id):
            raise AlreadyLiked()

        try:
            self.db.execute(insert(asset_likes).values(asset_id=asset.id, user_id=user_id))
            self.db.commit()
        except IntegrityError:
            # A concurrent request inserted the same like first
            self.db.rollback()
            raise AlreadyLiked() from None

        self.db.refresh(asset)
        logger.info(f"User {user_id} liked asset {asset_id}")
        return asset

    def remove_like(self, asset_id: int, user_id: int) -> Asset:
        asset = self.get(asset_id)
        result = self.db.execute(
            delete(asset_likes).where(
                asset_likes.c.asset_id == asset.id, asset_likes.c.user_id == user_id
            )
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotLiked()

        self.db.commit()
        self.db.refresh(asset)
        logger.info(f"User {user_id} unliked asset {asset_id}")
        return asset
