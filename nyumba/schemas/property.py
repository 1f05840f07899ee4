"""
Pydantic schemas for property requests and responses.
Handles listing CRUD operations, search filters, and validation.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from nyumba.models.property import PropertyType, PropertyStatus
from nyumba.schemas.user import PublicProfileResponse
from nyumba.schemas.image import PropertyImageResponse
from nyumba.utils.listing import parse_amenities


def _blank_to_none(v):
    if v is None:
        return None
    v = v.strip()
    return v or None


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    title: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Listing title",
        examples=["Modern 2BR Apartment in Kilimani"]
    )

    description: str = Field(
        ...,
        min_length=10,
        max_length=5000,
        description="Detailed listing description",
        examples=["Spacious 2-bedroom apartment close to shopping centers and restaurants."]
    )

    property_type: PropertyType = Field(
        ...,
        description="Unit layout",
        examples=["two_bedroom"]
    )

    price: Decimal = Field(
        ...,
        gt=0,
        description="Monthly rent in KSh",
        examples=[45000]
    )

    deposit: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Deposit in KSh",
        examples=[90000]
    )

    rooms: int = Field(1, ge=1, le=50, description="Number of rooms", examples=[2])

    location: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description="Area or estate",
        examples=["Kilimani"]
    )

    neighborhood: Optional[str] = Field(
        None,
        max_length=255,
        description="Neighborhood; blank is stored as null",
        examples=["Yaya Centre"]
    )

    amenities: List[str] = Field(
        default_factory=list,
        description="Amenities as a list or a comma separated string",
        examples=[["Parking", "WiFi", "Security"]]
    )

    is_furnished: bool = False
    utilities_included: bool = False
    available_from: Optional[date] = None
    video_url: Optional[str] = Field(None, max_length=500)

    @field_validator("title", "description", "location")
    @classmethod
    def validate_required_text(cls, v):
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("neighborhood", "video_url")
    @classmethod
    def validate_optional_text(cls, v):
        return _blank_to_none(v)

    @field_validator("amenities", mode="before")
    @classmethod
    def validate_amenities(cls, v):
        return parse_amenities(v)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v > Decimal("9999999999.99"):
            raise ValueError("Price exceeds maximum allowed value")
        return v


class PropertyCreate(PropertyBase):
    """Schema for posting a new listing."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Modern 2BR Apartment in Kilimani",
                "description": "Spacious 2-bedroom apartment with modern amenities, close to shopping centers.",
                "property_type": "two_bedroom",
                "price": 45000,
                "deposit": 90000,
                "rooms": 2,
                "location": "Kilimani",
                "neighborhood": "Kilimani",
                "amenities": "Parking, WiFi, Security",
                "is_furnished": True,
                "utilities_included": False
            }
        }
    }


class PropertyUpdate(BaseModel):
    """Schema for updating an existing listing. Omitted fields are unchanged."""

    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, min_length=10, max_length=5000)
    property_type: Optional[PropertyType] = None
    price: Optional[Decimal] = Field(None, gt=0)
    deposit: Optional[Decimal] = Field(None, ge=0)
    rooms: Optional[int] = Field(None, ge=1, le=50)
    location: Optional[str] = Field(None, min_length=2, max_length=255)
    neighborhood: Optional[str] = Field(None, max_length=255)
    amenities: Optional[List[str]] = None
    is_furnished: Optional[bool] = None
    utilities_included: Optional[bool] = None
    available_from: Optional[date] = None
    video_url: Optional[str] = Field(None, max_length=500)

    @field_validator("title", "description", "location")
    @classmethod
    def validate_text(cls, v):
        if v is not None:
            if not v.strip():
                raise ValueError("Field cannot be empty")
            return v.strip()
        return v

    @field_validator("neighborhood", "video_url")
    @classmethod
    def validate_optional_text(cls, v):
        return _blank_to_none(v)

    @field_validator("amenities", mode="before")
    @classmethod
    def validate_amenities(cls, v):
        if v is None:
            return v
        return parse_amenities(v)


class PropertyStatusUpdate(BaseModel):
    status: PropertyStatus = Field(..., description="New availability status", examples=["rented"])


class PropertyResponse(BaseModel):
    """Listing as returned by the API."""

    id: str
    caretaker_id: str
    title: str
    description: str
    property_type: PropertyType
    property_type_label: str = Field(..., examples=["Two Bedroom"])
    price: float
    deposit: Optional[float] = None
    rooms: int
    location: str
    neighborhood: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    is_furnished: bool
    utilities_included: bool
    available_from: Optional[date] = None
    status: str
    video_url: Optional[str] = None
    images: List[PropertyImageResponse] = Field(default_factory=list)
    display_image_url: str = Field(..., description="First image, or a stable placeholder")
    caretaker: Optional[PublicProfileResponse] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PropertyListResponse(BaseModel):
    """Schema for paginated property list response."""

    properties: List[PropertyResponse]
    total: int = Field(..., examples=[150])
    page: int = Field(..., examples=[1])
    page_size: int = Field(..., examples=[20])
    total_pages: int = Field(..., examples=[8])
    has_next: bool
    has_previous: bool


class ListingSearchFilters(BaseModel):
    """
    Search filters for the public listings page.
    "all" for property_type or rooms, and a blank location, mean no filter.
    """

    max_price: Optional[Decimal] = Field(None, ge=0, description="Price ceiling in KSh")
    property_type: Optional[PropertyType] = None
    rooms: Optional[int] = Field(None, ge=1, le=50)
    furnished: bool = Field(False, description="Only furnished units when true")
    location: Optional[str] = Field(None, max_length=255, description="Matches location or neighborhood")
    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1, le=100)

    @field_validator("property_type", "rooms", mode="before")
    @classmethod
    def validate_all_means_none(cls, v):
        if v is None:
            return None
        if isinstance(v, str) and v.strip().lower() in ("", "all"):
            return None
        return v

    @field_validator("location")
    @classmethod
    def validate_location(cls, v):
        return _blank_to_none(v)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


