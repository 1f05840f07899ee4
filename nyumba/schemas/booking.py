"""
Pydantic schemas for move requests (mover bookings).

Required fields are optional at the schema level so the booking service can
answer a missing value with the same message for every field.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from nyumba.models.booking import MoveRequestStatus


class MoveRequestCreate(BaseModel):
    mover_id: UUID
    move_date: Optional[date] = Field(None, examples=["2025-02-01"])
    pickup_location: Optional[str] = Field(None, max_length=500, examples=["Kilimani, Argwings Kodhek Rd"])
    dropoff_location: Optional[str] = Field(None, max_length=500, examples=["Westlands, Waiyaki Way"])
    notes: Optional[str] = Field(None, max_length=5000)
    packing_help: bool = False
    property_id: Optional[UUID] = None


class MoveRequestResponse(BaseModel):
    id: str
    tenant_id: str
    mover_id: str
    mover_business_name: Optional[str] = None
    property_id: Optional[str] = None
    move_date: date
    pickup_location: str
    dropoff_location: str
    van_size: str
    notes: Optional[str] = None
    packing_help: bool
    estimated_cost: Optional[float] = None
    distance_km: Optional[float] = None
    status: MoveRequestStatus
    created_at: datetime
    updated_at: datetime


class MoveRequestListResponse(BaseModel):
    requests: List[MoveRequestResponse]


class MoveRequestStatusUpdate(BaseModel):
    status: MoveRequestStatus = Field(..., examples=["accepted"])
