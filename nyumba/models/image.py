"""
PropertyImage model for listing photos.
Stores the public URL of each stored image and its gallery position.
"""

from sqlalchemy import String, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from nyumba.database import Base
import uuid
from typing import Optional


class PropertyImage(Base):
    """Photo attached to a listing, ordered by display_order."""

    __tablename__ = "property_images"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    image_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Public URL of the stored image"
    )

    storage_path: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Object key inside the storage bucket, when stored locally"
    )

    caption: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, order={self.display_order})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "image_url": self.image_url,
            "caption": self.caption,
            "display_order": self.display_order,
            "created_at": self.created_at,
        }
