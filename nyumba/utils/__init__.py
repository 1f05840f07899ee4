"""
Shared helpers: JWT handling, API exceptions, image storage and listing formatting.
"""

from .auth import create_access_token, create_refresh_token, verify_token, TokenPayload

from .exceptions import (
    APIException,
    BadRequestError,
    ConflictError,
    ExternalServiceError,
    ForbiddenError,
    MoveRequestNotFoundError,
    MoverNotFoundError,
    NotFoundError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ServiceNotConfiguredError,
    UnauthorizedError,
    ValidationError
)

from .listing import format_price, format_property_type, parse_amenities

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "verify_token",
    "TokenPayload",
    "APIException",
    "BadRequestError",
    "ConflictError",
    "ExternalServiceError",
    "ForbiddenError",
    "MoveRequestNotFoundError",
    "MoverNotFoundError",
    "NotFoundError",
    "PropertyNotFoundError",
    "PropertyOwnershipError",
    "ServiceNotConfiguredError",
    "UnauthorizedError",
    "ValidationError",
    "format_price",
    "format_property_type",
    "parse_amenities",
]
