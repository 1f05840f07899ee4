"""
Repositories for movers, their services and reviews.
"""

import uuid
from typing import List, Optional
from sqlalchemy import select, update, desc
from sqlalchemy.ext.asyncio import AsyncSession

from nyumba.models.mover import Mover, MoverService, MoverReview, VerificationStatus
from nyumba.repositories.base import BaseRepository


class MoverRepository(BaseRepository[Mover]):

    def __init__(self, db: AsyncSession):
        super().__init__(Mover, db)

    async def get_verified(self) -> List[Mover]:
        """
        Verified movers, highest stored rating first.

        Service-area filtering happens in Python because the areas are a JSON list.
        """
        query = (
            select(Mover)
            .where(Mover.verification_status == VerificationStatus.VERIFIED.value)
            .order_by(desc(Mover.rating), Mover.business_name)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_user_id(self, user_id: uuid.UUID) -> Optional[Mover]:
        result = await self.db.execute(select(Mover).where(Mover.user_id == user_id))
        return result.scalars().first()

    async def increment_total_jobs(self, mover_id: uuid.UUID) -> None:
        try:
            stmt = (
                update(Mover)
                .where(Mover.id == mover_id)
                .values(total_jobs=Mover.total_jobs + 1)
            )
            await self.db.execute(stmt)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise


class MoverServiceRepository(BaseRepository[MoverService]):

    def __init__(self, db: AsyncSession):
        super().__init__(MoverService, db)


class MoverReviewRepository(BaseRepository[MoverReview]):

    def __init__(self, db: AsyncSession):
        super().__init__(MoverReview, db)
