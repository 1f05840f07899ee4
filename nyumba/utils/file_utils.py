"""
File upload utilities for image validation and object storage.
Objects live under ``{storage_dir}/{bucket}/`` and are served under /media.
"""

import io
from pathlib import Path
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError
import aiofiles
import aiofiles.os
import logging

from nyumba.config import settings
from nyumba.utils.exceptions import (
    BadRequestError,
    FileSizeExceededError,
    UnsupportedFileTypeError
)

logger = logging.getLogger(__name__)


class FileValidator:
    """Utility class for image upload validation."""

    # Supported image formats and the extension each is stored with
    SUPPORTED_FORMATS = {
        "image/jpeg": "jpg",
        "image/png": "png",
        "image/webp": "webp",
    }

    PIL_FORMATS = {
        "JPEG": "image/jpeg",
        "PNG": "image/png",
        "WEBP": "image/webp",
    }

    @classmethod
    def validate_content_type(cls, content_type: Optional[str]) -> str:
        """
        Raises:
            UnsupportedFileTypeError: If the type is not an accepted image type
        """
        allowed = [t for t in settings.allowed_file_types if t in cls.SUPPORTED_FORMATS]
        if not content_type or content_type.lower() not in allowed:
            raise UnsupportedFileTypeError(content_type or "unknown", allowed)
        return content_type.lower()

    @classmethod
    def validate_file_size(cls, file_size: int, max_size: Optional[int] = None) -> int:
        if file_size <= 0:
            raise BadRequestError("File is empty")

        max_allowed = max_size or settings.max_file_size
        if file_size > max_allowed:
            raise FileSizeExceededError(file_size, max_allowed)

        return file_size

    @classmethod
    def validate_image_content(cls, content: bytes) -> Tuple[int, int, str]:
        """
        Decode the bytes with Pillow.

        Returns:
            Tuple of (width, height, detected content type)

        Raises:
            BadRequestError: If the bytes are not a supported image
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                img.verify()
            # verify() leaves the image unusable; reopen for metadata
            with Image.open(io.BytesIO(content)) as img:
                width, height = img.size
                detected = cls.PIL_FORMATS.get(img.format or "")
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise BadRequestError(f"Invalid image file: {str(e)}")

        if detected is None:
            raise BadRequestError("Invalid image file: unsupported image format")

        return width, height, detected

    @classmethod
    def extension_for(cls, content_type: str) -> str:
        return cls.SUPPORTED_FORMATS.get(content_type, "png")


class FileStorage:
    """Local-disk object store with public URL generation."""

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        bucket: Optional[str] = None,
        public_base_url: Optional[str] = None
    ):
        self.bucket = bucket or settings.storage_bucket
        self.root = Path(base_dir or settings.storage_dir) / self.bucket
        self.public_base_url = (public_base_url or settings.public_base_url).rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, object_path: str) -> Path:
        full_path = (self.root / object_path).resolve()
        if self.root.resolve() not in full_path.parents:
            raise BadRequestError("Invalid storage path")
        return full_path

    async def store_bytes(self, object_path: str, data: bytes, content_type: str) -> str:
        """
        Write an object and return its public URL.

        Args:
            object_path: Key inside the bucket, e.g. ``{user}/{property}/{ts}-0.jpg``
            data: Raw bytes
            content_type: MIME type, only used for logging
        """
        full_path = self._resolve(object_path)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(full_path, "wb") as f:
            await f.write(data)

        logger.debug(f"Stored {len(data)} bytes ({content_type}) at {self.bucket}/{object_path}")
        return self.public_url(object_path)

    def public_url(self, object_path: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{object_path}"

    async def delete_object(self, object_path: str) -> bool:
        full_path = self._resolve(object_path)
        if not full_path.exists():
            return False
        await aiofiles.os.remove(full_path)
        self._cleanup_empty_parents(full_path.parent)
        return True

    def _cleanup_empty_parents(self, directory: Path) -> None:
        root = self.root.resolve()
        while directory != root and root in directory.parents:
            if any(directory.iterdir()):
                break
            directory.rmdir()
            directory = directory.parent
