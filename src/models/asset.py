"""Asset model with its tags and likes."""

import re

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    event,
)
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.comment import Comment
from src.models.mixins import TimestampMixin

DEFAULT_IMAGE = "no-photo.jpg"
NAME_MAX_LENGTH = 50

# Composite primary key keeps a user at most once in an asset's likes
asset_likes = Table(
    "asset_likes",
    Base.metadata,
    Column("asset_id", Integer, ForeignKey("assets.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


def slugify(value: str) -> str:
    """Lowercase a name and join its alphanumeric runs with hyphens."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


class Asset(Base, TimestampMixin):
    """Asset shared by a user: described, tagged, liked and commented on."""

    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(255), nullable=False, default=DEFAULT_IMAGE)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    slug = Column(String(NAME_MAX_LENGTH), nullable=True, index=True)
    is_public = Column(Boolean, nullable=False, default=False)

    # Relationships
    owner = relationship("User", backref="assets")
    tag_entries = relationship(
        "AssetTag",
        back_populates="asset",
        order_by="AssetTag.position",
        cascade="all, delete-orphan",
    )
    likers = relationship("User", secondary=asset_likes, order_by="User.id")
    comments = relationship(
        "Comment",
        back_populates="asset",
        order_by=[Comment.created_at.desc(), Comment.id.desc()],
        cascade="all, delete-orphan",
    )

    @property
    def tags(self) -> list[str]:
        return [entry.tag for entry in self.tag_entries]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        self.tag_entries = [
            AssetTag(tag=value, position=position) for position, value in enumerate(values)
        ]

    @property
    def likes(self) -> list[int]:
        return [user.id for user in self.likers]


class AssetTag(Base):
    """One tag of an asset, kept in the order it was given."""

    __tablename__ = "asset_tags"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(
        Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    tag = Column(String(100), nullable=False, index=True)

    asset = relationship("Asset", back_populates="tag_entries")


@event.listens_for(Asset, "before_insert")
@event.listens_for(Asset, "before_update")
def _refresh_slug(mapper, connection, target: Asset) -> None:
    target.slug = slugify(target.name or "")
