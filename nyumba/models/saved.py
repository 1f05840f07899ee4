"""
SavedProperty model: a tenant's favorite listings.
"""

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from nyumba.database import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nyumba.models.property import Property


class SavedProperty(Base):
    """Many-to-many link between profiles and the listings they saved."""

    __tablename__ = "saved_properties"
    __table_args__ = (
        UniqueConstraint("user_id", "property_id", name="uq_saved_properties_user_property"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property: Mapped["Property"] = relationship("Property", lazy="selectin")

    def __repr__(self) -> str:
        return f"<SavedProperty(user_id={self.user_id}, property_id={self.property_id})>"
