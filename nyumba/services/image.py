"""
Image service for listing photo uploads, storage, and cleanup.
"""

import time
import uuid
from typing import List, Optional, Tuple
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from nyumba.config import settings
from nyumba.models.image import PropertyImage
from nyumba.models.property import Property
from nyumba.models.user import Profile
from nyumba.repositories.image import ImageRepository
from nyumba.repositories.property import PropertyRepository
from nyumba.utils.file_utils import FileStorage, FileValidator
from nyumba.utils.exceptions import (
    BadRequestError,
    NotFoundError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ResourceLimitExceededError
)

logger = logging.getLogger(__name__)


def build_object_path(user_id: uuid.UUID, property_id: uuid.UUID, index: int, extension: str,
                      timestamp_ms: Optional[int] = None) -> str:
    """Storage key ``{user_id}/{property_id}/{timestamp}-{index}.{ext}``."""
    timestamp_ms = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    return f"{user_id}/{property_id}/{timestamp_ms}-{index}.{extension}"


class ImageService:
    """Service for managing listing image uploads and storage."""

    def __init__(self, db_session: AsyncSession, storage: Optional[FileStorage] = None):
        self.db = db_session
        self.image_repo = ImageRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.storage = storage or FileStorage()
        self.max_images = settings.max_images_per_property

    async def validate_image_file(self, file: UploadFile) -> Tuple[bytes, str]:
        """
        Read and validate an uploaded image.

        Returns:
            Tuple of (content, content type)

        Raises:
            UnsupportedFileTypeError, FileSizeExceededError, BadRequestError
        """
        FileValidator.validate_content_type(file.content_type)

        await file.seek(0)
        content = await file.read()
        FileValidator.validate_file_size(len(content))

        _, _, detected_type = FileValidator.validate_image_content(content)
        if detected_type != file.content_type.lower():
            raise BadRequestError(f"File content doesn't match declared type {file.content_type}")

        return content, detected_type

    async def upload_property_images(
        self,
        property_id: uuid.UUID,
        files: List[UploadFile],
        current_user: Profile
    ) -> List[PropertyImage]:
        """
        Upload photos for a listing.

        Every file is validated before anything is stored. Files are numbered
        after the images already attached, and that number is the display order.

        Raises:
            PropertyNotFoundError: If the listing doesn't exist
            PropertyOwnershipError: If the user neither owns the listing nor is an admin
            ResourceLimitExceededError: If the listing would exceed the image limit
        """
        property_obj = await self._get_managed_property(property_id, current_user)

        if not files:
            raise BadRequestError("No files provided")

        existing_count = await self.image_repo.count_by_property_id(property_id)
        if existing_count + len(files) > self.max_images:
            raise ResourceLimitExceededError("Images per property", self.max_images)

        validated = [await self.validate_image_file(file) for file in files]

        timestamp_ms = int(time.time() * 1000)
        stored_paths = []
        rows = []
        try:
            for offset, (content, content_type) in enumerate(validated):
                index = existing_count + offset
                object_path = build_object_path(
                    current_user.id, property_obj.id, index,
                    FileValidator.extension_for(content_type), timestamp_ms
                )
                image_url = await self.storage.store_bytes(object_path, content, content_type)
                stored_paths.append(object_path)
                rows.append({
                    "property_id": property_obj.id,
                    "image_url": image_url,
                    "storage_path": object_path,
                    "display_order": index,
                })

            images = await self.image_repo.add_many(rows)
        except Exception:
            for object_path in stored_paths:
                await self.storage.delete_object(object_path)
            raise

        logger.info(f"Uploaded {len(images)} images for property {property_id} by {current_user.email}")
        return images

    async def get_property_images(self, property_id: uuid.UUID) -> List[PropertyImage]:
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(str(property_id))
        return await self.image_repo.get_by_property_id(property_id)

    async def delete_image(self, image_id: uuid.UUID, current_user: Profile) -> bool:
        image = await self.image_repo.get_by_id(image_id)
        if not image:
            raise NotFoundError("Image", str(image_id))

        await self._get_managed_property(image.property_id, current_user)

        deleted = await self.image_repo.delete(image_id)
        if deleted and image.storage_path:
            await self.storage.delete_object(image.storage_path)
        logger.info(f"Deleted image {image_id} from property {image.property_id}")
        return deleted

    async def stored_paths(self, property_id: uuid.UUID) -> List[str]:
        """Storage keys of every image of a listing."""
        images = await self.image_repo.get_by_property_id(property_id)
        return [image.storage_path for image in images if image.storage_path]

    async def remove_stored_files(self, storage_paths: List[str]) -> int:
        """
        Remove stored files once their rows are gone. A listing's rows go
        with it through the foreign-key cascade.
        """
        deleted_count = 0
        for storage_path in storage_paths:
            if await self.storage.delete_object(storage_path):
                deleted_count += 1

        logger.debug(f"Removed {deleted_count} of {len(storage_paths)} stored files")
        return deleted_count

    async def _get_managed_property(self, property_id: uuid.UUID, current_user: Profile) -> Property:
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError(str(property_id))

        if not current_user.can_manage_property(property_obj.caretaker_id):
            raise PropertyOwnershipError()

        return property_obj
