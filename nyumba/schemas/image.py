"""
Pydantic schemas for property image responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class PropertyImageResponse(BaseModel):
    """Stored listing photo."""

    id: str = Field(..., description="Image identifier")
    property_id: str = Field(..., description="Listing the image belongs to")
    image_url: str = Field(
        ...,
        description="Public URL of the stored image",
        examples=["http://localhost:8000/media/property-images/u/p/1700000000000-0.jpg"]
    )
    caption: Optional[str] = None
    display_order: int = Field(0, ge=0, description="Gallery position")
    created_at: datetime

    model_config = {"from_attributes": True}


class ImageUploadResponse(BaseModel):
    """Result of a multi-file upload."""

    property_id: str
    uploaded: List[PropertyImageResponse] = Field(default_factory=list)
    total_images: int = Field(..., description="Images now attached to the listing")
