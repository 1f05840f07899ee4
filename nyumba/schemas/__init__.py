"""
Pydantic schemas for request/response validation.
"""

from .auth import LoginRequest, RefreshTokenRequest, AccessTokenResponse, LoginResponse
from .user import ProfileCreate, ProfileUpdate, ProfileResponse, PublicProfileResponse
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyStatusUpdate,
    PropertyResponse,
    PropertyListResponse,
    ListingSearchFilters
)
from .image import PropertyImageResponse, ImageUploadResponse
from .message import (
    MessageCreate,
    MessageResponse,
    ConversationSummary,
    ConversationListResponse,
    ThreadResponse,
    UnreadCountResponse
)
from .mover import (
    MoverCreate,
    MoverServiceCreate,
    MoverReviewCreate,
    MoverResponse,
    MoverDetailResponse,
    MoverVerificationUpdate
)
from .booking import MoveRequestCreate, MoveRequestResponse, MoveRequestStatusUpdate
from .assistant import AssistantRequest, AssistantResponse, AISettingsUpdate, SeedResponse

__all__ = [
    "LoginRequest",
    "RefreshTokenRequest",
    "AccessTokenResponse",
    "LoginResponse",
    "ProfileCreate",
    "ProfileUpdate",
    "ProfileResponse",
    "PublicProfileResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyStatusUpdate",
    "PropertyResponse",
    "PropertyListResponse",
    "ListingSearchFilters",
    "PropertyImageResponse",
    "ImageUploadResponse",
    "MessageCreate",
    "MessageResponse",
    "ConversationSummary",
    "ConversationListResponse",
    "ThreadResponse",
    "UnreadCountResponse",
    "MoverCreate",
    "MoverServiceCreate",
    "MoverReviewCreate",
    "MoverResponse",
    "MoverDetailResponse",
    "MoverVerificationUpdate",
    "MoveRequestCreate",
    "MoveRequestResponse",
    "MoveRequestStatusUpdate",
    "AssistantRequest",
    "AssistantResponse",
    "AISettingsUpdate",
    "SeedResponse",
]
