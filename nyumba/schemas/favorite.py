"""
Pydantic schemas for saved properties.
"""

from pydantic import BaseModel, Field
from typing import List

from nyumba.schemas.property import PropertyResponse


class FavoriteStatusResponse(BaseModel):
    property_id: str
    saved: bool = Field(..., description="Whether the listing is saved after the call")


class SavedPropertiesResponse(BaseModel):
    properties: List[PropertyResponse]
    total: int
