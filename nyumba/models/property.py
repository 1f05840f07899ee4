"""
Property model for rental listings.
Handles listing data with location, pricing, amenities and relationship management.
"""

from sqlalchemy import (
    String, Text, Integer, Numeric, Boolean, Date, JSON, Enum as SQLEnum, Index, ForeignKey, Uuid
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from nyumba.database import Base
from nyumba.models.user import enum_values
from decimal import Decimal
from datetime import date
import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from nyumba.models.user import Profile
    from nyumba.models.image import PropertyImage


class PropertyType(str, enum.Enum):
    """Unit layout of a rental listing."""
    STUDIO = "studio"
    ONE_BEDROOM = "one_bedroom"
    TWO_BEDROOM = "two_bedroom"
    THREE_BEDROOM_PLUS = "three_bedroom_plus"
    BEDSITTER = "bedsitter"


class PropertyStatus(str, enum.Enum):
    """Listing availability. Stored as a plain string column."""
    AVAILABLE = "available"
    PENDING = "pending"
    RENTED = "rented"


class Property(Base):
    """
    Rental listing posted by a caretaker.
    """

    __tablename__ = "properties"

    caretaker_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Profile that posted and manages the listing"
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, name="property_type", values_callable=enum_values),
        nullable=False,
        index=True
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
        comment="Monthly rent in KSh"
    )

    deposit: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=True
    )

    rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1, index=True)

    location: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    neighborhood: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    is_furnished: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    utilities_included: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    available_from: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=PropertyStatus.AVAILABLE.value,
        index=True
    )

    video_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    caretaker: Mapped["Profile"] = relationship("Profile", lazy="selectin")

    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PropertyImage.display_order"
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}..., price={self.price})>"

    @property
    def is_available(self) -> bool:
        return self.status == PropertyStatus.AVAILABLE.value

    def to_dict(self, include_caretaker: bool = False) -> dict:
        from nyumba.utils.listing import format_property_type, select_display_image

        result = {
            "id": str(self.id),
            "caretaker_id": str(self.caretaker_id),
            "title": self.title,
            "description": self.description,
            "property_type": self.property_type.value,
            "property_type_label": format_property_type(self.property_type.value),
            "price": float(self.price),
            "deposit": float(self.deposit) if self.deposit is not None else None,
            "rooms": self.rooms,
            "location": self.location,
            "neighborhood": self.neighborhood,
            "amenities": list(self.amenities or []),
            "is_furnished": self.is_furnished,
            "utilities_included": self.utilities_included,
            "available_from": self.available_from,
            "status": self.status,
            "video_url": self.video_url,
            "images": [image.to_dict() for image in self.images],
            "display_image_url": select_display_image(self),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

        if include_caretaker and self.caretaker:
            result["caretaker"] = self.caretaker.to_public_dict()

        return result


# Listing page: available rows, newest first
status_created_index = Index(
    "idx_properties_status_created",
    Property.status,
    Property.created_at.desc()
)

# Price ceiling filter within available rows
status_price_index = Index(
    "idx_properties_status_price",
    Property.status,
    Property.price
)

# Caretaker dashboard
caretaker_created_index = Index(
    "idx_properties_caretaker_created",
    Property.caretaker_id,
    Property.created_at.desc()
)
