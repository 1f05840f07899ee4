"""
Property service: listing search, posting, and caretaker management.
"""

from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from nyumba.models.property import Property, PropertyStatus
from nyumba.models.user import Profile, UserRole
from nyumba.repositories.property import PropertyRepository
from nyumba.schemas.property import ListingSearchFilters, PropertyCreate, PropertyUpdate
from nyumba.services.image import ImageService
from nyumba.utils.exceptions import (
    InsufficientPermissionsError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ValidationError
)

logger = logging.getLogger(__name__)

POSTING_ROLES = (UserRole.CARETAKER, UserRole.ADMIN)


class PropertyService:
    """
    Business rules for listings. Only caretakers and admins post; only the
    posting caretaker or an admin may change or remove a listing.
    """

    def __init__(self, db_session: AsyncSession, image_service: Optional[ImageService] = None):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.image_service = image_service or ImageService(db_session)

    async def search_listings(self, filters: ListingSearchFilters) -> Tuple[List[Property], int]:
        """Available listings matching the filters, newest first."""
        properties, total = await self.property_repo.search_listings(filters)
        logger.debug(f"Listing search returned {len(properties)} of {total} results")
        return properties, total

    async def get_listing(self, property_id: uuid.UUID) -> Property:
        """
        Raises:
            PropertyNotFoundError: If the listing doesn't exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError(str(property_id))
        return property_obj

    async def create_property(self, property_data: PropertyCreate, current_user: Profile) -> Property:
        """
        Post a new listing owned by the current user.

        Raises:
            InsufficientPermissionsError: If the user is not a caretaker or admin
        """
        if current_user.user_role not in POSTING_ROLES:
            logger.warning(f"{current_user.email} ({current_user.user_role.value}) tried to post a property")
            raise InsufficientPermissionsError("post properties")

        create_data = property_data.model_dump()
        create_data["caretaker_id"] = current_user.id
        create_data["status"] = PropertyStatus.AVAILABLE.value

        property_obj = await self.property_repo.create(create_data)
        logger.info(f"Property created by {current_user.email}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def update_property(
        self,
        property_id: uuid.UUID,
        property_data: PropertyUpdate,
        current_user: Profile
    ) -> Property:
        property_obj = await self._get_managed_property(property_id, current_user)

        changes = property_data.model_dump(exclude_unset=True)
        # Required columns cannot be cleared
        for field in ("title", "description", "property_type", "price", "rooms", "location",
                      "amenities", "is_furnished", "utilities_included"):
            if field in changes and changes[field] is None:
                del changes[field]

        if not changes:
            raise ValidationError("No valid fields provided for update")

        updated = await self.property_repo.update(property_obj.id, changes)
        logger.info(f"Property updated by {current_user.email}: {property_id} ({', '.join(changes)})")
        return updated

    async def set_status(self, property_id: uuid.UUID, status: PropertyStatus, current_user: Profile) -> Property:
        property_obj = await self._get_managed_property(property_id, current_user)
        updated = await self.property_repo.update(property_obj.id, {"status": status.value})
        logger.info(f"Property {property_id} marked {status.value} by {current_user.email}")
        return updated

    async def delete_property(self, property_id: uuid.UUID, current_user: Profile) -> bool:
        """Remove a listing and its stored photos."""
        property_obj = await self._get_managed_property(property_id, current_user)

        storage_paths = await self.image_service.stored_paths(property_obj.id)
        deleted = await self.property_repo.delete(property_obj.id)
        removed_files = await self.image_service.remove_stored_files(storage_paths) if deleted else 0

        logger.info(f"Property deleted by {current_user.email}: {property_id} (with {removed_files} images)")
        return deleted

    async def get_my_properties(self, current_user: Profile) -> List[Property]:
        """The caretaker dashboard: every own listing in any status."""
        return await self.property_repo.get_by_caretaker(current_user.id)

    async def get_featured_properties(self, limit: int = 6) -> List[Property]:
        """Most recent available listings for the home page."""
        if limit < 1 or limit > 50:
            raise ValidationError("Limit must be between 1 and 50")
        return await self.property_repo.get_recent_available(limit)

    async def _get_managed_property(self, property_id: uuid.UUID, current_user: Profile) -> Property:
        property_obj = await self.get_listing(property_id)
        if not current_user.can_manage_property(property_obj.caretaker_id):
            raise PropertyOwnershipError()
        return property_obj
