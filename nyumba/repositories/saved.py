"""
Repository for saved properties (favorites).
"""

import uuid
from typing import List, Optional
from sqlalchemy import select, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from nyumba.models.saved import SavedProperty
from nyumba.repositories.base import BaseRepository


class SavedPropertyRepository(BaseRepository[SavedProperty]):

    def __init__(self, db: AsyncSession):
        super().__init__(SavedProperty, db)

    async def get_pair(self, user_id: uuid.UUID, property_id: uuid.UUID) -> Optional[SavedProperty]:
        query = select(SavedProperty).where(
            SavedProperty.user_id == user_id,
            SavedProperty.property_id == property_id
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def delete_pair(self, user_id: uuid.UUID, property_id: uuid.UUID) -> bool:
        try:
            stmt = delete(SavedProperty).where(
                SavedProperty.user_id == user_id,
                SavedProperty.property_id == property_id
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
            return result.rowcount > 0
        except Exception:
            await self.db.rollback()
            raise

    async def get_for_user(self, user_id: uuid.UUID) -> List[SavedProperty]:
        """Saved rows with their listing loaded, most recently saved first."""
        query = (
            select(SavedProperty)
            .where(SavedProperty.user_id == user_id)
            .order_by(desc(SavedProperty.created_at))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
