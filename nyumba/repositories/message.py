"""
Repository for messages between profiles.
"""

import uuid
from typing import List
from sqlalchemy import select, update, func, or_, and_, asc, desc
from sqlalchemy.ext.asyncio import AsyncSession

from nyumba.models.message import Message
from nyumba.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):

    def __init__(self, db: AsyncSession):
        super().__init__(Message, db)

    async def get_for_user(self, user_id: uuid.UUID) -> List[Message]:
        """Every message the user sent or received, newest first."""
        query = (
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(desc(Message.created_at))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_thread(self, user_id: uuid.UUID, partner_id: uuid.UUID) -> List[Message]:
        """Both directions between two profiles, oldest first."""
        query = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == partner_id),
                    and_(Message.sender_id == partner_id, Message.receiver_id == user_id)
                )
            )
            .order_by(asc(Message.created_at))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def mark_thread_read(self, user_id: uuid.UUID, partner_id: uuid.UUID) -> int:
        """Mark messages from partner to user as read. Returns the number updated."""
        try:
            stmt = (
                update(Message)
                .where(
                    Message.sender_id == partner_id,
                    Message.receiver_id == user_id,
                    Message.read.is_(False)
                )
                .values(read=True)
                .execution_options(synchronize_session="fetch")
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
            return result.rowcount
        except Exception:
            await self.db.rollback()
            raise

    async def count_unread(self, user_id: uuid.UUID) -> int:
        query = select(func.count(Message.id)).where(
            Message.receiver_id == user_id,
            Message.read.is_(False)
        )
        result = await self.db.execute(query)
        return result.scalar() or 0
