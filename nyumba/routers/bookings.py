"""
Mover booking endpoints.
"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Path, status

from nyumba.models.user import Profile
from nyumba.schemas.booking import (
    MoveRequestCreate,
    MoveRequestListResponse,
    MoveRequestResponse,
    MoveRequestStatusUpdate
)
from nyumba.schemas.error import get_common_error_responses, get_crud_error_responses
from nyumba.services.bookings import BookingService
from nyumba.utils.dependencies import get_booking_service, get_current_active_user, get_optional_current_user

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post(
    "",
    response_model=MoveRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a mover",
    description="Request a move. The quote comes from the mover's first listed service.",
    responses=get_crud_error_responses()
)
async def book_mover(
    booking_data: MoveRequestCreate,
    current_user: Optional[Profile] = Depends(get_optional_current_user),
    booking_service: BookingService = Depends(get_booking_service)
) -> MoveRequestResponse:
    move_request = await booking_service.book_mover(current_user, booking_data)
    return MoveRequestResponse.model_validate(move_request.to_dict())


@router.get(
    "/mine",
    response_model=MoveRequestListResponse,
    summary="My bookings",
    responses=get_common_error_responses()
)
async def my_bookings(
    current_user: Profile = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service)
) -> MoveRequestListResponse:
    requests = await booking_service.my_bookings(current_user)
    return MoveRequestListResponse.model_validate({"requests": [r.to_dict() for r in requests]})


@router.get(
    "/requests",
    response_model=MoveRequestListResponse,
    summary="Requests for my moving business",
    responses=get_crud_error_responses()
)
async def mover_requests(
    current_user: Profile = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service)
) -> MoveRequestListResponse:
    requests = await booking_service.mover_requests(current_user)
    return MoveRequestListResponse.model_validate({"requests": [r.to_dict() for r in requests]})


@router.patch(
    "/{request_id}/status",
    response_model=MoveRequestResponse,
    summary="Update booking status",
    description="Movers accept, decline or complete; tenants cancel",
    responses=get_crud_error_responses()
)
async def update_booking_status(
    status_data: MoveRequestStatusUpdate,
    request_id: UUID = Path(..., description="Move request ID"),
    current_user: Profile = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service)
) -> MoveRequestResponse:
    move_request = await booking_service.update_booking_status(request_id, status_data.status, current_user)
    return MoveRequestResponse.model_validate(move_request.to_dict())
