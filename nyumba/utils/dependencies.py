"""
FastAPI dependency injection utilities for authentication, services and storage.
Provides reusable dependencies for route protection and user extraction.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from nyumba.database import get_db
from nyumba.models.user import Profile, UserRole
from nyumba.services.assistant import AssistantService
from nyumba.services.auth import AuthService
from nyumba.services.bookings import BookingService
from nyumba.services.favorites import FavoritesService
from nyumba.services.image import ImageService
from nyumba.services.messaging import MessagingService
from nyumba.services.movers import MoversService
from nyumba.services.property import PropertyService
from nyumba.services.seeding import SeedingService
from nyumba.utils.exceptions import (
    UnauthorizedError,
    InvalidTokenError,
    TokenExpiredError,
    InactiveUserError,
    InsufficientPermissionsError
)
from nyumba.utils.file_utils import FileStorage


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_file_storage() -> FileStorage:
    """Storage backend for uploaded and generated images. Overridden in tests."""
    return FileStorage()


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_image_service(
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage)
) -> ImageService:
    return ImageService(db, storage)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    image_service: ImageService = Depends(get_image_service)
) -> PropertyService:
    return PropertyService(db, image_service)


async def get_favorites_service(db: AsyncSession = Depends(get_db)) -> FavoritesService:
    return FavoritesService(db)


async def get_messaging_service(db: AsyncSession = Depends(get_db)) -> MessagingService:
    return MessagingService(db)


async def get_movers_service(db: AsyncSession = Depends(get_db)) -> MoversService:
    return MoversService(db)


async def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(db)


async def get_assistant_service(db: AsyncSession = Depends(get_db)) -> AssistantService:
    return AssistantService(db)


async def get_seeding_service(
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage)
) -> SeedingService:
    return SeedingService(db, storage)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Profile:
    """
    Get current authenticated profile from the bearer token.

    Raises:
        UnauthorizedError: If no token provided or token is invalid
        TokenExpiredError: If token is expired
        InactiveUserError: If the account is inactive
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)


async def get_current_active_user(
    current_user: Profile = Depends(get_current_user)
) -> Profile:
    if not current_user.is_active:
        raise InactiveUserError()

    return current_user


async def get_current_admin_user(
    current_user: Profile = Depends(get_current_active_user),
    auth_service: AuthService = Depends(get_auth_service)
) -> Profile:
    """
    Get current profile with admin rights (admin user_role or admin role grant).

    Raises:
        InsufficientPermissionsError: If the user is not an admin
    """
    if not await auth_service.is_admin(current_user):
        raise InsufficientPermissionsError("access admin resources")

    return current_user


def require_role(required_role: UserRole):
    """
    Create a dependency that requires a specific marketplace role (admins always pass).
    """
    async def role_dependency(
        current_user: Profile = Depends(get_current_active_user)
    ) -> Profile:
        if current_user.user_role != required_role and current_user.user_role != UserRole.ADMIN:
            raise InsufficientPermissionsError(f"access {required_role.value} resources")
        return current_user

    return role_dependency


# Optional authentication dependency (public endpoints that can use a signed-in user)
async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Profile]:
    """
    Get the current profile if a valid token is provided, otherwise None.
    Database and other unexpected errors still propagate.
    """
    if not credentials:
        return None

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except (UnauthorizedError, InvalidTokenError, TokenExpiredError, InactiveUserError):
        return None
