"""
Listing photo endpoints: multi-file upload, gallery listing and removal.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, File, Path, UploadFile, status

from nyumba.models.user import Profile
from nyumba.schemas.error import get_crud_error_responses, get_error_responses
from nyumba.schemas.image import ImageUploadResponse, PropertyImageResponse
from nyumba.services.image import ImageService
from nyumba.utils.dependencies import get_current_active_user, get_image_service

router = APIRouter(tags=["Images"])


@router.post(
    "/properties/{property_id}/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload listing photos",
    description="Upload up to 10 JPEG, PNG or WebP photos per listing. Owner or admin only.",
    responses=get_crud_error_responses()
)
async def upload_property_images(
    property_id: UUID = Path(..., description="Property ID"),
    files: List[UploadFile] = File(..., description="Image files to upload"),
    current_user: Profile = Depends(get_current_active_user),
    image_service: ImageService = Depends(get_image_service)
) -> ImageUploadResponse:
    images = await image_service.upload_property_images(property_id, files, current_user)
    total = await image_service.image_repo.count_by_property_id(property_id)
    return ImageUploadResponse(
        property_id=str(property_id),
        uploaded=[PropertyImageResponse.model_validate(image.to_dict()) for image in images],
        total_images=total
    )


@router.get(
    "/properties/{property_id}/images",
    response_model=List[PropertyImageResponse],
    summary="Listing photos",
    description="Photos of a listing in display order",
    responses=get_error_responses(404, 422)
)
async def get_property_images(
    property_id: UUID = Path(..., description="Property ID"),
    image_service: ImageService = Depends(get_image_service)
) -> List[PropertyImageResponse]:
    images = await image_service.get_property_images(property_id)
    return [PropertyImageResponse.model_validate(image.to_dict()) for image in images]


@router.delete(
    "/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a listing photo",
    responses=get_crud_error_responses()
)
async def delete_image(
    image_id: UUID = Path(..., description="Image ID"),
    current_user: Profile = Depends(get_current_active_user),
    image_service: ImageService = Depends(get_image_service)
) -> None:
    await image_service.delete_image(image_id, current_user)
