"""
Admin endpoints: demo data seeding.
"""

from fastapi import APIRouter, Depends, Query, status

from nyumba.models.user import Profile
from nyumba.schemas.assistant import SeedResponse
from nyumba.schemas.error import get_common_error_responses
from nyumba.services.seed_catalog import STANDARD
from nyumba.services.seeding import SeedingService
from nyumba.utils.dependencies import get_current_admin_user, get_seeding_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/seed",
    response_model=SeedResponse,
    status_code=status.HTTP_200_OK,
    summary="Seed demo listings",
    description=(
        "Create the demo caretaker and one listing per catalog entry, each with a generated photo. "
        "Entries that fail are skipped."
    ),
    responses=get_common_error_responses()
)
async def seed_properties(
    catalog: str = Query(STANDARD, description="standard or affordable"),
    current_user: Profile = Depends(get_current_admin_user),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> SeedResponse:
    return SeedResponse(**await seeding_service.seed(catalog))
