"""
Property repository for listing search and caretaker dashboards.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, func, desc
from nyumba.repositories.base import BaseRepository
from nyumba.models.property import Property, PropertyStatus
from nyumba.schemas.property import ListingSearchFilters
from typing import List, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


def build_listing_conditions(filters: ListingSearchFilters) -> List:
    """
    Build the WHERE clause for the public listings page.

    Only available listings are ever shown. Every other filter is optional
    and the conditions are combined with AND.
    """
    conditions = [Property.status == PropertyStatus.AVAILABLE.value]

    if filters.max_price is not None:
        conditions.append(Property.price <= filters.max_price)

    if filters.property_type is not None:
        conditions.append(Property.property_type == filters.property_type)

    if filters.rooms is not None:
        conditions.append(Property.rooms == filters.rooms)

    if filters.furnished:
        conditions.append(Property.is_furnished.is_(True))

    # Case-insensitive match on either the area or the neighborhood
    if filters.location:
        pattern = f"%{filters.location}%"
        conditions.append(
            or_(
                Property.location.ilike(pattern),
                Property.neighborhood.ilike(pattern)
            )
        )

    return conditions


class PropertyRepository(BaseRepository[Property]):
    """Repository for listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def search_listings(self, filters: ListingSearchFilters) -> Tuple[List[Property], int]:
        """
        Search available listings, newest first.

        Returns:
            Tuple of (page of properties, total matching count)
        """
        try:
            conditions = build_listing_conditions(filters)

            count_query = select(func.count(Property.id)).where(and_(*conditions))
            total_count = (await self.db.execute(count_query)).scalar() or 0

            query = (
                select(Property)
                .where(and_(*conditions))
                .order_by(desc(Property.created_at))
                .offset(filters.offset)
                .limit(filters.page_size)
            )
            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            logger.debug(f"Listing search returned {len(properties)} of {total_count} total results")
            return properties, total_count
        except Exception as e:
            logger.error(f"Failed to search listings: {e}")
            raise

    async def get_by_caretaker(self, caretaker_id: uuid.UUID) -> List[Property]:
        """All of a caretaker's listings regardless of status, newest first."""
        query = (
            select(Property)
            .where(Property.caretaker_id == caretaker_id)
            .order_by(desc(Property.created_at))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_recent_available(self, limit: int) -> List[Property]:
        """Most recently posted available listings."""
        query = (
            select(Property)
            .where(Property.status == PropertyStatus.AVAILABLE.value)
            .order_by(desc(Property.created_at))
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
