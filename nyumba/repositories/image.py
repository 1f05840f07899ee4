"""
Repository for PropertyImage model operations.
"""

import uuid
from typing import List
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from nyumba.models.image import PropertyImage
from nyumba.repositories.base import BaseRepository


class ImageRepository(BaseRepository[PropertyImage]):
    """Repository for PropertyImage database operations."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(PropertyImage, db_session)

    async def get_by_property_id(self, property_id: uuid.UUID) -> List[PropertyImage]:
        """Images of a listing in gallery order."""
        query = (
            select(PropertyImage)
            .where(PropertyImage.property_id == property_id)
            .order_by(PropertyImage.display_order.asc(), PropertyImage.created_at.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_by_property_id(self, property_id: uuid.UUID) -> int:
        query = select(func.count(PropertyImage.id)).where(PropertyImage.property_id == property_id)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def add_many(self, images: List[dict]) -> List[PropertyImage]:
        """Insert several image rows in one commit."""
        try:
            objects = [PropertyImage(**data) for data in images]
            self.db.add_all(objects)
            await self.db.commit()
            return objects
        except Exception:
            await self.db.rollback()
            raise
