"""User model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin

DEFAULT_AVATAR = "no-photo.jpg"

# follower_id follows user_id
user_followers = Table(
    "user_followers",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("follower_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base, TimestampMixin):
    """User model for authentication, profile and asset ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    nickname = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    avatar = Column(String(255), nullable=False, default=DEFAULT_AVATAR)
    reset_password_token = Column(String(255), nullable=True)
    reset_password_expire = Column(DateTime(timezone=True), nullable=True)

    followers = relationship(
        "User",
        secondary=user_followers,
        primaryjoin=id == user_followers.c.user_id,
        secondaryjoin=id == user_followers.c.follower_id,
        backref="following",
    )

    @property
    def follower_ids(self) -> list[int]:
        return [follower.id for follower in self.followers]
