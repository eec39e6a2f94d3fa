"""User lifecycle: registration, login, profile changes and account deletion."""

import logging
import re
import secrets
from typing import Any

from fastapi import UploadFile
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.asset import Asset, asset_likes
from src.models.comment import Comment
from src.models.user import User
from src.services.auth import TokenService, get_password_hash, verify_password
from src.services.exceptions import Conflict, InvalidCredentials, NotFound, ValidationError
from src.services.storage import AvatarStorage

logger = logging.getLogger(__name__)
settings = get_settings()

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

ACCOUNT_DELETED_MESSAGE = "User deleted. Please remove the token from local storage."


class UserService:
    """Service for user-related operations."""

    def __init__(
        self,
        db: Session,
        token_service: TokenService,
        storage: AvatarStorage | None = None,
    ):
        self.db = db
        self.token_service = token_service
        self.storage = storage or AvatarStorage()

    # --- Lookups ---

    def get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFound(f"User not found with id of {user_id}")
        return user

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def _is_taken(self, column, value: str, exclude_user_id: int | None) -> bool:
        query = self.db.query(User.id).filter(column == value)
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        return query.first() is not None

    def collect_errors(
        self,
        fields: dict[str, Any],
        required: bool = True,
        exclude_user_id: int | None = None,
    ) -> list[str]:
        """Check user fields in a fixed order and return every violated rule.

        With ``required=False`` only the fields present in ``fields`` are
        checked, which is how profile updates are validated.
        """
        errors = []

        def supplied(key: str) -> bool:
            return required or key in fields

        if supplied("name") and not (fields.get("name") or "").strip():
            errors.append("Please add a name")

        nickname = (fields.get("nickname") or "").strip()
        if supplied("nickname") and not nickname:
            errors.append("Please add a nickname")

        if supplied("email"):
            email = (fields.get("email") or "").strip().lower()
            if not email:
                errors.append("Please add an email")
            elif not EMAIL_PATTERN.match(email):
                errors.append("Please add a valid email")
            elif email == settings.deleted_user_email.lower():
                errors.append("This email is reserved")
            elif self._is_taken(User.email, email, exclude_user_id):
                errors.append("Email already registered")

        if nickname.lower() == settings.deleted_user_nickname.lower():
            errors.append("This nickname is reserved")
        elif nickname and self._is_taken(User.nickname, nickname, exclude_user_id):
            errors.append("Nickname already taken")

        if supplied("password"):
            password = fields.get("password") or ""
            if not password:
                errors.append("Please add a password")
            elif len(password) < PASSWORD_MIN_LENGTH:
                errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
            elif len(password) > PASSWORD_MAX_LENGTH:
                errors.append(f"Password must be at most {PASSWORD_MAX_LENGTH} characters")

        return errors

    # --- Authentication ---

    def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        nickname: str | None,
    ) -> tuple[User, str]:
        fields = {"name": name, "email": email, "password": password, "nickname": nickname}
        errors = self.collect_errors(fields)
        if errors:
            raise ValidationError(errors)

        user = User(
            name=name.strip(),
            nickname=nickname.strip(),
            email=email.strip().lower(),
            password_hash=get_password_hash(password),
            avatar=settings.default_avatar,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError("Email or nickname already registered") from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.nickname})")
        return user, self.token_service.issue(user.id)

    def login(self, email: str, password: str) -> tuple[User, str]:
        user = self.get_by_email(email)
        if user is None:
            raise NotFound("No user registered with that email")
        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return user, self.token_service.issue(user.id)

    def logout(self, token: str) -> None:
        self.token_service.revoke(token)

    # --- Profile ---

    def update_profile(
        self,
        user_id: int,
        fields: dict[str, Any],
        avatar: UploadFile | None = None,
    ) -> User:
        """Apply profile changes and optionally replace the avatar.

        The new avatar is written first and the database committed before the
        previous avatar file is removed, so a failed commit never leaves the
        user pointing at a deleted file.
        """
        user = self.get_user(user_id)
        errors = self.collect_errors(fields, required=False, exclude_user_id=user.id)
        if errors:
            raise ValidationError(errors)

        previous_avatar = user.avatar
        new_avatar = self.storage.save(user.id, avatar) if avatar is not None else None
        if new_avatar:
            user.avatar = new_avatar

        if "name" in fields:
            user.name = fields["name"].strip()
        if "nickname" in fields:
            user.nickname = fields["nickname"].strip()
        if "email" in fields:
            user.email = fields["email"].strip().lower()
        if "password" in fields:
            user.password_hash = get_password_hash(fields["password"])

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            if new_avatar:
                self.storage.delete(new_avatar)
            if isinstance(e, IntegrityError):
                raise ValidationError("Email or nickname already registered") from e
            raise

        if new_avatar and previous_avatar != new_avatar:
            self.storage.delete(previous_avatar)

        self.db.refresh(user)
        logger.info(f"Updated profile of user {user.id}")
        return user

    def update_avatar(self, user_id: int, avatar: UploadFile) -> User:
        return self.update_profile(user_id, {}, avatar)

    def delete_avatar(self, user_id: int) -> User:
        """Reset the avatar to the default image."""
        user = self.get_user(user_id)
        previous_avatar = user.avatar
        user.avatar = settings.default_avatar
        self.db.commit()

        self.storage.delete(previous_avatar)
        self.db.refresh(user)
        logger.info(f"Reset avatar of user {user.id}")
        return user

    # --- Followers ---

    def follow(self, user_id: int, target_id: int) -> User:
        if user_id == target_id:
            raise ValidationError("You cannot follow yourself")
        follower = self.get_user(user_id)
        target = self.get_user(target_id)
        if follower in target.followers:
            raise Conflict("Already following this user")

        target.followers.append(follower)
        self.db.commit()
        self.db.refresh(target)
        logger.info(f"User {user_id} followed user {target_id}")
        return target

    def unfollow(self, user_id: int, target_id: int) -> User:
        follower = self.get_user(user_id)
        target = self.get_user(target_id)
        if follower not in target.followers:
            raise Conflict("Not following this user")

        target.followers.remove(follower)
        self.db.commit()
        self.db.refresh(target)
        logger.info(f"User {user_id} unfollowed user {target_id}")
        return target

    # --- Account deletion ---

    def get_deleted_user(self) -> User:
        """Get the placeholder owner for assets of deleted accounts, creating it if needed."""
        sentinel = self.get_by_email(settings.deleted_user_email)
        if sentinel is not None:
            return sentinel

        nickname = settings.deleted_user_nickname
        if self._is_taken(User.nickname, nickname, None):
            # Held by an account created before the nickname was reserved
            nickname = f"{nickname}-{secrets.token_hex(4)}"
            logger.warning(f"Nickname {settings.deleted_user_nickname} in use, using {nickname}")

        sentinel = User(
            name=settings.deleted_user_name,
            nickname=nickname,
            email=settings.deleted_user_email.lower(),
            # Random password nobody knows
            password_hash=get_password_hash(secrets.token_urlsafe(32)),
            avatar=settings.default_avatar,
        )
        self.db.add(sentinel)
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            # Another request created it first
            sentinel = self.get_by_email(settings.deleted_user_email)
            if sentinel is None:
                raise Conflict("Deleted-user account could not be created") from None
            return sentinel

        logger.info(f"Created deleted-user account {sentinel.id}")
        return sentinel

    def delete_account(self, user_id: int, token: str) -> str:
        """Delete a user, hand their assets and comments to the deleted-user account."""
        user = self.get_user(user_id)
        if user.email == settings.deleted_user_email.lower():
            raise ValidationError("The deleted-user account cannot be deleted")

        sentinel = self.get_deleted_user()

        reassigned = (
            self.db.query(Asset)
            .filter(Asset.owner_id == user.id)
            .update({Asset.owner_id: sentinel.id}, synchronize_session=False)
        )
        self.db.query(Comment).filter(Comment.author_id == user.id).update(
            {Comment.author_id: sentinel.id}, synchronize_session=False
        )
        self.db.execute(delete(asset_likes).where(asset_likes.c.user_id == user.id))

        avatar = user.avatar
        # Reload relationships so the delete does not touch reassigned assets
        self.db.expire(user)
        self.db.delete(user)
        self.db.commit()

        self.storage.delete(avatar)
        self.token_service.revoke(token)
        logger.info(
            f"Deleted user {user_id}, reassigned {reassigned} assets to user {sentinel.id}"
        )
        return ACCOUNT_DELETED_MESSAGE
