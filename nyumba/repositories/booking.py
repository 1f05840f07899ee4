"""
Repository for move requests.
"""

import uuid
from typing import List
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from nyumba.models.booking import MoveRequest
from nyumba.repositories.base import BaseRepository


class MoveRequestRepository(BaseRepository[MoveRequest]):

    def __init__(self, db: AsyncSession):
        super().__init__(MoveRequest, db)

    async def get_for_tenant(self, tenant_id: uuid.UUID) -> List[MoveRequest]:
        query = (
            select(MoveRequest)
            .where(MoveRequest.tenant_id == tenant_id)
            .order_by(desc(MoveRequest.created_at))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_for_mover(self, mover_id: uuid.UUID) -> List[MoveRequest]:
        query = (
            select(MoveRequest)
            .where(MoveRequest.mover_id == mover_id)
            .order_by(desc(MoveRequest.created_at))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
