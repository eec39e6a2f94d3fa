"""Comment model."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base

TEXT_MIN_LENGTH = 5
TEXT_MAX_LENGTH = 200


class Comment(Base):
    """Comment left by a user on an asset."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(
        Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    text = Column(String(TEXT_MAX_LENGTH), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    asset = relationship("Asset", back_populates="comments")
    author = relationship("User")
