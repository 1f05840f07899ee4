"""
Pydantic schemas for the movers marketplace.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from nyumba.models.mover import VerificationStatus


class MoverCreate(BaseModel):
    """Register the current user's moving business."""

    business_name: str = Field(..., min_length=2, max_length=255, examples=["Swift Movers Nairobi"])
    description: Optional[str] = Field(None, max_length=5000)
    phone: str = Field(..., min_length=7, max_length=32, examples=["+254712345678"])
    email: Optional[EmailStr] = None
    avatar_url: Optional[str] = Field(None, max_length=500)
    service_areas: List[str] = Field(
        default_factory=list,
        description="Areas served, usually taken from the Nairobi area chips",
        examples=[["Westlands", "Kilimani"]]
    )

    @field_validator("business_name", "phone")
    @classmethod
    def validate_text(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("service_areas")
    @classmethod
    def validate_service_areas(cls, v):
        seen = []
        for area in v:
            area = area.strip()
            if area and area not in seen:
                seen.append(area)
        return seen


class MoverServiceCreate(BaseModel):
    van_size: str = Field(..., min_length=1, max_length=64, examples=["pickup"])
    hourly_rate: Decimal = Field(..., ge=0, examples=[2500])
    fixed_rate: Optional[Decimal] = Field(None, ge=0, examples=[8000])
    description: Optional[str] = Field(None, max_length=2000)


class MoverServiceResponse(BaseModel):
    id: str
    mover_id: str
    van_size: str
    hourly_rate: float
    fixed_rate: Optional[float] = None
    description: Optional[str] = None


class MoverReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Stars, 1 to 5")
    comment: Optional[str] = Field(None, max_length=2000)
    move_request_id: Optional[UUID] = None


class MoverReviewResponse(BaseModel):
    id: str
    mover_id: str
    reviewer_id: str
    move_request_id: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    created_at: datetime


class MoverResponse(BaseModel):
    id: str
    user_id: str
    business_name: str
    description: Optional[str] = None
    phone: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    rating: float = Field(..., description="Stored rating")
    average_rating: float = Field(..., description="Mean of reviews, else the stored rating")
    review_count: int = 0
    service_areas: List[str] = Field(default_factory=list)
    total_jobs: int = 0
    verification_status: VerificationStatus
    services: List[MoverServiceResponse] = Field(default_factory=list)
    created_at: datetime


class MoverDetailResponse(MoverResponse):
    reviews: List[MoverReviewResponse] = Field(default_factory=list)


class MoverVerificationUpdate(BaseModel):
    verification_status: VerificationStatus


class ServiceAreasResponse(BaseModel):
    areas: List[str]
