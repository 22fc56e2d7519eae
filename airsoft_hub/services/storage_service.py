import logging
import os
import secrets
from typing import Optional

from fastapi import UploadFile

from airsoft_hub.core import config

logger = logging.getLogger(__name__)


class ThumbnailRejected(ValueError):
    """The upload is not acceptable (too large, not an image). Maps to 400."""


class StorageError(Exception):
    """The upload could not be written to disk. Maps to 500."""


class StorageService:
    def __init__(self, upload_dir: str, url_prefix: str = "/uploads", max_bytes: int = config.MAX_THUMBNAIL_BYTES):
        self.upload_dir = upload_dir
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def _generate_filename(self, original_filename: Optional[str]) -> str:
        """Generate unique filename keeping the original extension"""
        ext = os.path.splitext(original_filename or "")[1].lower()
        if not ext:
            ext = ".img"
        return f"{secrets.token_hex(16)}{ext}"

    def validate(self, content: bytes, content_type: Optional[str]) -> None:
        if len(content) > self.max_bytes:
            raise ThumbnailRejected("Thumbnail too large (max 5MB)")
        # A part without a declared content type is accepted
        if content_type and not content_type.startswith("image/"):
            raise ThumbnailRejected("Thumbnail must be an image")

    async def save_thumbnail(self, file: UploadFile) -> str:
        """
        Validate and store an uploaded thumbnail

        Args:
            file: FastAPI UploadFile from a multipart form

        Returns:
            Relative URL of the stored file, e.g. /uploads/<hex>.jpg

        Raises:
            ThumbnailRejected: size or content type not acceptable
            StorageError: directory or file could not be written
        """
        # Reject on the declared part size before reading anything
        if file.size is not None and file.size > self.max_bytes:
            raise ThumbnailRejected("Thumbnail too large (max 5MB)")
        content = await file.read(self.max_bytes + 1)
        self.validate(content, file.content_type)

        try:
            os.makedirs(self.upload_dir, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create upload dir {self.upload_dir}: {str(e)}", exc_info=True)
            raise StorageError("Failed to prepare upload dir") from e

        filename = self._generate_filename(file.filename)
        dest_path = os.path.join(self.upload_dir, filename)
        try:
            with open(dest_path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write thumbnail {dest_path}: {str(e)}", exc_info=True)
            raise StorageError("Failed to save thumbnail") from e

        logger.info(f"Saved thumbnail {filename} ({len(content)} bytes)")
        return f"{self.url_prefix}/{filename}"

    def delete_thumbnail(self, url: Optional[str]) -> bool:
        """Delete a thumbnail previously returned by save_thumbnail"""
        if not url or not url.startswith(f"{self.url_prefix}/"):
            return False
        path = os.path.join(self.upload_dir, os.path.basename(url))
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Failed to delete thumbnail {path}: {str(e)}")
            return False
        logger.info(f"Deleted thumbnail {os.path.basename(path)}")
        return True


storage_service = StorageService(config.UPLOAD_DIR)


def get_storage_service() -> StorageService:
    return storage_service
