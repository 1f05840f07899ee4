"""
Movers marketplace endpoints: directory, registration, services, reviews and vetting.
"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Path, Query, status

from nyumba.models.user import Profile
from nyumba.schemas.error import get_common_error_responses, get_crud_error_responses, get_error_responses
from nyumba.schemas.mover import (
    MoverCreate,
    MoverDetailResponse,
    MoverResponse,
    MoverReviewCreate,
    MoverReviewResponse,
    MoverServiceCreate,
    MoverServiceResponse,
    MoverVerificationUpdate,
    ServiceAreasResponse
)
from nyumba.services.movers import NAIROBI_AREAS, MoversService, serialize_mover
from nyumba.utils.dependencies import get_current_active_user, get_current_admin_user, get_movers_service

router = APIRouter(prefix="/movers", tags=["Movers"])


@router.get(
    "",
    response_model=List[MoverResponse],
    summary="Verified movers",
    description="Verified movers with their services and average rating, optionally filtered by service area"
)
async def list_movers(
    area: Optional[str] = Query(None, description="Service area, e.g. Kilimani"),
    movers_service: MoversService = Depends(get_movers_service)
) -> List[MoverResponse]:
    movers = await movers_service.list_movers(area)
    return [MoverResponse.model_validate(serialize_mover(mover)) for mover in movers]


@router.get("/areas", response_model=ServiceAreasResponse, summary="Service area chips")
async def service_areas() -> ServiceAreasResponse:
    return ServiceAreasResponse(areas=list(NAIROBI_AREAS))


@router.get(
    "/me",
    response_model=MoverDetailResponse,
    summary="My mover profile",
    responses=get_crud_error_responses()
)
async def my_mover_profile(
    current_user: Profile = Depends(get_current_active_user),
    movers_service: MoversService = Depends(get_movers_service)
) -> MoverDetailResponse:
    mover = await movers_service.get_own_mover(current_user)
    return MoverDetailResponse.model_validate(serialize_mover(mover, include_reviews=True))


@router.get(
    "/{mover_id}",
    response_model=MoverDetailResponse,
    summary="Mover detail",
    responses=get_error_responses(404, 422)
)
async def get_mover(
    mover_id: UUID = Path(..., description="Mover ID"),
    movers_service: MoversService = Depends(get_movers_service)
) -> MoverDetailResponse:
    mover = await movers_service.get_mover(mover_id)
    return MoverDetailResponse.model_validate(serialize_mover(mover, include_reviews=True))


@router.post(
    "",
    response_model=MoverResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register as a mover",
    description="Create the current user's moving business. It stays pending until an admin verifies it.",
    responses=get_crud_error_responses()
)
async def register_mover(
    mover_data: MoverCreate,
    current_user: Profile = Depends(get_current_active_user),
    movers_service: MoversService = Depends(get_movers_service)
) -> MoverResponse:
    mover = await movers_service.register_mover(mover_data, current_user)
    return MoverResponse.model_validate(serialize_mover(mover))


@router.post(
    "/{mover_id}/services",
    response_model=MoverServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a van service",
    responses=get_crud_error_responses()
)
async def add_service(
    service_data: MoverServiceCreate,
    mover_id: UUID = Path(..., description="Mover ID"),
    current_user: Profile = Depends(get_current_active_user),
    movers_service: MoversService = Depends(get_movers_service)
) -> MoverServiceResponse:
    service = await movers_service.add_service(mover_id, service_data, current_user)
    return MoverServiceResponse.model_validate(service.to_dict())


@router.post(
    "/{mover_id}/reviews",
    response_model=MoverReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a mover",
    responses=get_crud_error_responses()
)
async def add_review(
    review_data: MoverReviewCreate,
    mover_id: UUID = Path(..., description="Mover ID"),
    current_user: Profile = Depends(get_current_active_user),
    movers_service: MoversService = Depends(get_movers_service)
) -> MoverReviewResponse:
    review = await movers_service.add_review(mover_id, review_data, current_user)
    return MoverReviewResponse.model_validate(review.to_dict())


@router.patch(
    "/{mover_id}/verification",
    response_model=MoverResponse,
    summary="Vet a mover",
    description="Set a mover's verification status. Admin only.",
    responses=get_crud_error_responses()
)
async def verify_mover(
    verification: MoverVerificationUpdate,
    mover_id: UUID = Path(..., description="Mover ID"),
    current_user: Profile = Depends(get_current_admin_user),
    movers_service: MoversService = Depends(get_movers_service)
) -> MoverResponse:
    mover = await movers_service.verify_mover(mover_id, verification.verification_status, current_user)
    return MoverResponse.model_validate(serialize_mover(mover))
