"""
Favorites service: a tenant's saved listings.
"""

from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from nyumba.models.property import Property
from nyumba.models.user import Profile
from nyumba.repositories.property import PropertyRepository
from nyumba.repositories.saved import SavedPropertyRepository
from nyumba.utils.exceptions import PropertyNotFoundError

logger = logging.getLogger(__name__)


class FavoritesService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.saved_repo = SavedPropertyRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def is_saved(self, user: Profile, property_id: uuid.UUID) -> bool:
        return await self.saved_repo.get_pair(user.id, property_id) is not None

    async def save(self, user: Profile, property_id: uuid.UUID) -> bool:
        """Save a listing. Saving twice leaves a single row."""
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(str(property_id))

        if await self.is_saved(user, property_id):
            return True

        # A failed insert rolls back and expires user
        user_id, email = user.id, user.email
        try:
            await self.saved_repo.create({"user_id": user_id, "property_id": property_id})
        except IntegrityError:
            # A concurrent request inserted the same pair
            logger.debug(f"Property {property_id} already saved by {user_id}")
        else:
            logger.info(f"{email} saved property {property_id}")
        return True

    async def unsave(self, user: Profile, property_id: uuid.UUID) -> bool:
        removed = await self.saved_repo.delete_pair(user.id, property_id)
        if removed:
            logger.info(f"{user.email} removed saved property {property_id}")
        return False

    async def toggle(self, user: Profile, property_id: uuid.UUID) -> bool:
        """Flip the saved state and return the new state."""
        if await self.is_saved(user, property_id):
            return await self.unsave(user, property_id)
        return await self.save(user, property_id)

    async def list_saved(self, user: Profile) -> List[Property]:
        """Saved listings, most recently saved first."""
        saved_rows = await self.saved_repo.get_for_user(user.id)
        return [row.property for row in saved_rows if row.property is not None]
