"""
MoveRequest model: a tenant's booking with a mover.
"""

from sqlalchemy import String, Text, Numeric, Boolean, Date, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from nyumba.database import Base
from decimal import Decimal
from datetime import date
import enum
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from nyumba.models.mover import Mover


class MoveRequestStatus(str, enum.Enum):
    """Booking status strings."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


DEFAULT_VAN_SIZE = "pickup"


class MoveRequest(Base):
    """Booking record linking a tenant to a mover for a scheduled move."""

    __tablename__ = "move_requests"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    mover_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("movers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True
    )

    move_date: Mapped[date] = mapped_column(Date, nullable=False)

    pickup_location: Mapped[str] = mapped_column(String(500), nullable=False)

    dropoff_location: Mapped[str] = mapped_column(String(500), nullable=False)

    van_size: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_VAN_SIZE)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    packing_help: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    estimated_cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=10, scale=2), nullable=True)

    distance_km: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=8, scale=2), nullable=True)

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=MoveRequestStatus.PENDING.value,
        index=True
    )

    mover: Mapped["Mover"] = relationship("Mover", lazy="selectin")

    def __repr__(self) -> str:
        return f"<MoveRequest(id={self.id}, mover_id={self.mover_id}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "tenant_id": str(self.tenant_id),
            "mover_id": str(self.mover_id),
            "mover_business_name": self.mover.business_name if self.mover else None,
            "property_id": str(self.property_id) if self.property_id else None,
            "move_date": self.move_date,
            "pickup_location": self.pickup_location,
            "dropoff_location": self.dropoff_location,
            "van_size": self.van_size,
            "notes": self.notes,
            "packing_help": self.packing_help,
            "estimated_cost": float(self.estimated_cost) if self.estimated_cost is not None else None,
            "distance_km": float(self.distance_km) if self.distance_km is not None else None,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


mover_status_index = Index(
    "idx_move_requests_mover_status",
    MoveRequest.mover_id,
    MoveRequest.status
)
