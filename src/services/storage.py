"""Avatar file storage on the local filesystem."""

import logging
import os
import shutil
import uuid

from fastapi import UploadFile

from src.config import get_settings
from src.services.exceptions import ValidationError

logger = logging.getLogger(__name__)
settings = get_settings()

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class AvatarStorage:
    """Stores uploaded avatars under a directory served as static files."""

    def __init__(
        self,
        upload_dir: str | None = None,
        default_avatar: str | None = None,
        max_size_bytes: int | None = None,
    ):
        self.upload_dir = upload_dir or settings.upload_dir
        self.default_avatar = default_avatar or settings.default_avatar
        self.max_size_bytes = max_size_bytes or settings.max_avatar_size_mb * 1024 * 1024

    def path_for(self, filename: str) -> str:
        return os.path.join(self.upload_dir, os.path.basename(filename))

    def save(self, user_id: int, upload: UploadFile) -> str:
        """Write an uploaded image and return its new filename."""
        extension = ALLOWED_IMAGE_TYPES.get(upload.content_type or "")
        if extension is None:
            raise ValidationError(
                f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}"
            )

        upload.file.seek(0, os.SEEK_END)
        size = upload.file.tell()
        upload.file.seek(0)
        if size > self.max_size_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_size_bytes // (1024 * 1024)}MB."
            )

        os.makedirs(self.upload_dir, exist_ok=True)
        filename = f"avatar_{user_id}_{uuid.uuid4().hex}{extension}"
        with open(self.path_for(filename), "wb") as target:
            shutil.copyfileobj(upload.file, target)

        logger.info(f"Stored avatar {filename} for user {user_id}")
        return filename

    def delete(self, filename: str | None) -> bool:
        """Remove a stored avatar. The default avatar is never removed."""
        if not filename or filename == self.default_avatar:
            return False
        path = self.path_for(filename)
        if not os.path.exists(path):
            logger.warning(f"Avatar file {filename} already missing")
            return False
        os.remove(path)
        logger.info(f"Deleted avatar {filename}")
        return True


def get_avatar_storage() -> AvatarStorage:
    """Get avatar storage configured from settings."""
    return AvatarStorage()
