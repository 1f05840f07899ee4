"""
Mover models: business profiles, their van services and customer reviews.
"""

from sqlalchemy import String, Text, Integer, Numeric, JSON, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from nyumba.database import Base
from decimal import Decimal
import enum
import uuid
from typing import List, Optional


class VerificationStatus(str, enum.Enum):
    """Mover vetting state. Stored as a plain string column."""
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class Mover(Base):
    """Relocation service provider owned by a profile."""

    __tablename__ = "movers"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    business_name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    phone: Mapped[str] = mapped_column(String(32), nullable=False)

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    rating: Mapped[Decimal] = mapped_column(
        Numeric(precision=3, scale=2),
        nullable=False,
        default=Decimal("0"),
        comment="Stored rating used when there are no reviews"
    )

    service_areas: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    total_jobs: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    verification_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=VerificationStatus.PENDING.value,
        index=True
    )

    services: Mapped[List["MoverService"]] = relationship(
        "MoverService",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="MoverService.created_at"
    )

    reviews: Mapped[List["MoverReview"]] = relationship(
        "MoverReview",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="MoverReview.created_at.desc()"
    )

    def __repr__(self) -> str:
        return f"<Mover(id={self.id}, business_name={self.business_name})>"

    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED.value

    @property
    def primary_service(self) -> Optional["MoverService"]:
        return self.services[0] if self.services else None

    def to_dict(self, include_reviews: bool = False) -> dict:
        result = {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "business_name": self.business_name,
            "description": self.description,
            "phone": self.phone,
            "email": self.email,
            "avatar_url": self.avatar_url,
            "rating": float(self.rating or 0),
            "review_count": len(self.reviews),
            "service_areas": list(self.service_areas or []),
            "total_jobs": self.total_jobs,
            "verification_status": self.verification_status,
            "services": [service.to_dict() for service in self.services],
            "created_at": self.created_at,
        }
        if include_reviews:
            result["reviews"] = [review.to_dict() for review in self.reviews]
        return result


class MoverService(Base):
    """A van size the mover offers, with its rates."""

    __tablename__ = "mover_services"

    mover_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("movers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    van_size: Mapped[str] = mapped_column(String(64), nullable=False)

    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)

    fixed_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=10, scale=2), nullable=True)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "mover_id": str(self.mover_id),
            "van_size": self.van_size,
            "hourly_rate": float(self.hourly_rate),
            "fixed_rate": float(self.fixed_rate) if self.fixed_rate is not None else None,
            "description": self.description,
        }


class MoverReview(Base):
    """Star rating left by a customer."""

    __tablename__ = "mover_reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_mover_reviews_rating_range"),
    )

    mover_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("movers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    reviewer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    move_request_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("move_requests.id", ondelete="SET NULL"),
        nullable=True
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "mover_id": str(self.mover_id),
            "reviewer_id": str(self.reviewer_id),
            "move_request_id": str(self.move_request_id) if self.move_request_id else None,
            "rating": self.rating,
            "comment": self.comment,
            "created_at": self.created_at,
        }
