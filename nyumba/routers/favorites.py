"""
Saved-property endpoints. Every route requires a signed-in user.
"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Path, status

from nyumba.models.user import Profile
from nyumba.schemas.error import get_crud_error_responses
from nyumba.schemas.favorite import FavoriteStatusResponse, SavedPropertiesResponse
from nyumba.schemas.property import PropertyResponse
from nyumba.services.favorites import FavoritesService
from nyumba.utils.dependencies import get_favorites_service, get_optional_current_user
from nyumba.utils.exceptions import UnauthorizedError

router = APIRouter(prefix="/favorites", tags=["Favorites"])


async def require_signed_in(
    current_user: Optional[Profile] = Depends(get_optional_current_user)
) -> Profile:
    if current_user is None:
        raise UnauthorizedError("Please sign in to save properties")
    return current_user


def _status(property_id: UUID, saved: bool) -> FavoriteStatusResponse:
    return FavoriteStatusResponse(property_id=str(property_id), saved=saved)


@router.get(
    "",
    response_model=SavedPropertiesResponse,
    summary="Saved listings",
    description="The current user's saved listings, most recently saved first",
    responses=get_crud_error_responses()
)
async def list_saved(
    current_user: Profile = Depends(require_signed_in),
    favorites_service: FavoritesService = Depends(get_favorites_service)
) -> SavedPropertiesResponse:
    properties = await favorites_service.list_saved(current_user)
    return SavedPropertiesResponse(
        properties=[PropertyResponse.model_validate(p.to_dict()) for p in properties],
        total=len(properties)
    )


@router.get("/{property_id}", response_model=FavoriteStatusResponse, summary="Is this listing saved?",
            responses=get_crud_error_responses())
async def is_saved(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(require_signed_in),
    favorites_service: FavoritesService = Depends(get_favorites_service)
) -> FavoriteStatusResponse:
    return _status(property_id, await favorites_service.is_saved(current_user, property_id))


@router.post("/{property_id}", response_model=FavoriteStatusResponse, status_code=status.HTTP_200_OK,
             summary="Save a listing", description="Saving an already saved listing changes nothing",
             responses=get_crud_error_responses())
async def save_property(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(require_signed_in),
    favorites_service: FavoritesService = Depends(get_favorites_service)
) -> FavoriteStatusResponse:
    return _status(property_id, await favorites_service.save(current_user, property_id))


@router.delete("/{property_id}", response_model=FavoriteStatusResponse, summary="Unsave a listing",
               responses=get_crud_error_responses())
async def unsave_property(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(require_signed_in),
    favorites_service: FavoritesService = Depends(get_favorites_service)
) -> FavoriteStatusResponse:
    return _status(property_id, await favorites_service.unsave(current_user, property_id))


@router.post("/{property_id}/toggle", response_model=FavoriteStatusResponse, summary="Toggle saved state",
             description="Flip the saved state and return the new one", responses=get_crud_error_responses())
async def toggle_saved(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(require_signed_in),
    favorites_service: FavoritesService = Depends(get_favorites_service)
) -> FavoriteStatusResponse:
    return _status(property_id, await favorites_service.toggle(current_user, property_id))
