"""SQLAlchemy models."""

from src.models.asset import Asset, AssetTag, asset_likes
from src.models.comment import Comment
from src.models.user import User, user_followers

__all__ = [
    "User",
    "Asset",
    "AssetTag",
    "Comment",
    "asset_likes",
    "user_followers",
]
