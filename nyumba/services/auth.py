"""
Authentication service for registration, login, token management and role checks.
"""

from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from nyumba.repositories.user import UserRepository
from nyumba.models.user import Profile, UserRole, AppRole
from nyumba.schemas.user import ProfileCreate, ProfileUpdate
from nyumba.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_token
)
from nyumba.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    InactiveUserError,
    NotFoundError,
    ValidationError,
    DuplicateResourceError,
    InsufficientPermissionsError
)
from jose import JWTError, ExpiredSignatureError
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing accounts and tokens.
    Handles sign-up and sign-in flows, token refresh, and role-based access control.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register(self, data: ProfileCreate) -> Tuple[Profile, str, str]:
        """
        Create an account and sign it in.

        Args:
            data: Registration payload

        Returns:
            Tuple of (profile, access_token, refresh_token)

        Raises:
            InsufficientPermissionsError: If the caller asks for the admin role
            DuplicateResourceError: If the email is already registered
            ValidationError: If the email or password is rejected
        """
        if data.user_role == UserRole.ADMIN:
            logger.warning(f"Rejected self-assigned admin role for {data.email}")
            raise InsufficientPermissionsError("assign the admin role")

        if await self.user_repo.get_by_email(data.email):
            raise DuplicateResourceError("User", data.email)

        try:
            profile = await self.user_repo.create_profile(data.model_dump())
        except ValueError as e:
            raise ValidationError(str(e))

        access_token, refresh_token = self.create_tokens(profile)
        logger.info(f"Registered {profile.user_role.value} account: {profile.email}")
        return profile, access_token, refresh_token

    async def authenticate_user(self, email: str, password: str) -> Profile:
        """
        Authenticate a profile with email and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid
            InactiveUserError: If the account is inactive
        """
        if not email or not email.strip() or not password:
            raise ValidationError("Email and password are required")

        profile = await self.user_repo.authenticate(email, password)

        if not profile:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        if not profile.is_active:
            raise InactiveUserError()

        logger.info(f"User authenticated successfully: {profile.email}")
        return profile

    def create_tokens(self, profile: Profile) -> Tuple[str, str]:
        """Create (access_token, refresh_token) for a profile."""
        access_token = create_access_token(
            user_id=profile.id,
            email=profile.email,
            role=profile.user_role
        )
        refresh_token = create_refresh_token(
            user_id=profile.id,
            email=profile.email
        )
        return access_token, refresh_token

    async def login(self, email: str, password: str) -> Tuple[Profile, str, str]:
        """Authenticate and issue tokens."""
        profile = await self.authenticate_user(email, password)
        access_token, refresh_token = self.create_tokens(profile)
        return profile, access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str) -> str:
        """
        Create a new access token from a refresh token.

        Raises:
            InvalidTokenError: If refresh token is invalid
            TokenExpiredError: If refresh token is expired
            InactiveUserError: If the account is inactive
        """
        profile = await self._profile_from_token(refresh_token, "refresh")
        return create_access_token(
            user_id=profile.id,
            email=profile.email,
            role=profile.user_role
        )

    async def get_current_user(self, token: str) -> Profile:
        """
        Resolve the profile behind an access token.

        Raises:
            InvalidTokenError: If token is invalid or the profile no longer exists
            TokenExpiredError: If token is expired
            InactiveUserError: If the account is inactive
        """
        return await self._profile_from_token(token, "access")

    async def _profile_from_token(self, token: str, token_type: str) -> Profile:
        try:
            payload = verify_token(token, token_type=token_type)
            user_id = uuid.UUID(payload.user_id)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except (JWTError, ValueError) as e:
            raise InvalidTokenError(str(e))

        profile = await self.user_repo.get_by_id(user_id)
        if not profile:
            raise InvalidTokenError("User no longer exists")

        if not profile.is_active:
            raise InactiveUserError()

        return profile

    async def get_user_by_id(self, user_id: uuid.UUID) -> Profile:
        profile = await self.user_repo.get_by_id(user_id)
        if not profile:
            raise NotFoundError("User", str(user_id))
        return profile

    async def update_profile(self, profile: Profile, data: ProfileUpdate) -> Profile:
        """Apply the fields the caller actually sent."""
        changes = data.model_dump(exclude_unset=True)
        if "full_name" in changes and changes["full_name"] is None:
            del changes["full_name"]

        updated = await self.user_repo.update(profile.id, changes)
        logger.info(f"Profile updated: {profile.email} ({', '.join(changes) or 'no changes'})")
        return updated

    async def has_role(self, user_id: uuid.UUID, role: AppRole) -> bool:
        """Whether the profile holds an application role grant."""
        return await self.user_repo.has_role(user_id, role)

    async def is_admin(self, profile: Profile) -> bool:
        """Admins are either admin-role profiles or holders of the admin grant."""
        if profile.is_admin:
            return True
        return await self.has_role(profile.id, AppRole.ADMIN)

    def can_manage_resource(self, profile: Profile, resource_owner_id: uuid.UUID) -> bool:
        return profile.can_manage_property(resource_owner_id)
