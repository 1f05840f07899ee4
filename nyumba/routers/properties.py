"""
Listing endpoints: public search and detail, and caretaker management.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import List, Optional
from uuid import UUID
import math

from nyumba.models.property import Property
from nyumba.models.user import Profile
from nyumba.schemas.error import get_common_error_responses, get_crud_error_responses, get_error_responses
from nyumba.schemas.property import (
    ListingSearchFilters,
    PropertyCreate,
    PropertyListResponse,
    PropertyResponse,
    PropertyStatusUpdate,
    PropertyUpdate
)
from nyumba.services.property import PropertyService
from nyumba.utils.dependencies import get_current_active_user, get_property_service


router = APIRouter(prefix="/properties", tags=["Properties"])


def to_response(property_obj: Property, include_caretaker: bool = False) -> PropertyResponse:
    return PropertyResponse.model_validate(property_obj.to_dict(include_caretaker=include_caretaker))


@router.get(
    "",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="Search available listings",
    description="Available listings, newest first. 'all' for type or rooms and a blank location mean no filter.",
    responses=get_error_responses(422)
)
async def search_listings(
    max_price: Optional[float] = Query(None, ge=0, description="Price ceiling in KSh"),
    property_type: Optional[str] = Query(None, description="Listing type or 'all'"),
    rooms: Optional[str] = Query(None, description="Exact number of rooms or 'all'"),
    furnished: bool = Query(False, description="Only furnished units"),
    location: Optional[str] = Query(None, description="Matches location or neighborhood, case-insensitive"),
    page: int = Query(1, ge=1, description="Page number (starts from 1)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of listings per page"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    filters = ListingSearchFilters(
        max_price=max_price,
        property_type=property_type,
        rooms=rooms,
        furnished=furnished,
        location=location,
        page=page,
        page_size=page_size
    )

    properties, total = await property_service.search_listings(filters)
    total_pages = math.ceil(total / filters.page_size) if total > 0 else 0

    return PropertyListResponse(
        properties=[to_response(p) for p in properties],
        total=total,
        page=filters.page,
        page_size=filters.page_size,
        total_pages=total_pages,
        has_next=filters.page < total_pages,
        has_previous=filters.page > 1
    )


@router.get(
    "/featured",
    response_model=List[PropertyResponse],
    summary="Featured listings",
    description="Most recent available listings for the home page"
)
async def featured_listings(
    limit: int = Query(6, ge=1, le=50),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.get_featured_properties(limit)
    return [to_response(p) for p in properties]


@router.get(
    "/mine",
    response_model=List[PropertyResponse],
    summary="My listings",
    description="Every listing posted by the current user, in any status, newest first",
    responses=get_common_error_responses()
)
async def my_properties(
    current_user: Profile = Depends(get_current_active_user),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.get_my_properties(current_user)
    return [to_response(p) for p in properties]


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Listing detail",
    description="A listing with its photos in display order and the caretaker's contact card",
    responses=get_error_responses(404, 422)
)
async def get_listing(
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_listing(property_id)
    return to_response(property_obj, include_caretaker=True)


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a property",
    description="Create a listing. Requires the caretaker or admin role. Photos are uploaded separately.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    current_user: Profile = Depends(get_current_active_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_property(property_data, current_user)
    return to_response(property_obj)


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update a listing",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(get_current_active_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(property_id, property_data, current_user)
    return to_response(property_obj)


@router.patch(
    "/{property_id}/status",
    response_model=PropertyResponse,
    summary="Change listing status",
    description="Mark a listing available, pending or rented",
    responses=get_crud_error_responses()
)
async def set_property_status(
    status_data: PropertyStatusUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(get_current_active_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.set_status(property_id, status_data.status, current_user)
    return to_response(property_obj)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a listing",
    description="Remove a listing together with its photos",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(get_current_active_user),
    property_service: PropertyService = Depends(get_property_service)
) -> None:
    await property_service.delete_property(property_id, current_user)
