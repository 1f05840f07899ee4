"""
Message model for in-app conversations between profiles.
"""

from sqlalchemy import Text, Boolean, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from nyumba.database import Base
import uuid
from typing import Optional


class Message(Base):
    """
    A directed message from sender to receiver, optionally about a listing.
    """

    __tablename__ = "messages"

    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    receiver_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, sender={self.sender_id}, receiver={self.receiver_id})>"

    def partner_of(self, user_id: uuid.UUID) -> uuid.UUID:
        """The other party of this message from the point of view of user_id."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "sender_id": str(self.sender_id),
            "receiver_id": str(self.receiver_id),
            "property_id": str(self.property_id) if self.property_id else None,
            "content": self.content,
            "read": self.read,
            "created_at": self.created_at,
        }


receiver_unread_index = Index(
    "idx_messages_receiver_read",
    Message.receiver_id,
    Message.read
)
