"""
Profile repository for authentication and role lookups.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from nyumba.repositories.base import BaseRepository
from nyumba.models.user import Profile, UserRole, AppRole, UserRoleGrant
from typing import Optional, Dict, Any, Iterable
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[Profile]):
    """
    Repository for profiles with email lookup, password checks and role grants.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Profile, db)

    async def create_profile(self, profile_data: Dict[str, Any]) -> Profile:
        """
        Create a new profile with email validation and password hashing.

        Args:
            profile_data: Must include email, password, full_name.
                          Optional: phone, user_role (defaults to tenant)

        Returns:
            Created profile instance

        Raises:
            ValueError: If the email is invalid, taken, or the password too short
        """
        data = dict(profile_data)
        email = Profile.validate_email_format(data.pop("email"))

        if await self.get_by_email(email):
            raise ValueError(f"User with email {email} already exists")

        hashed_password = Profile.hash_password(data.pop("password"))

        create_data = {
            **data,
            "email": email,
            "hashed_password": hashed_password,
            "user_role": data.get("user_role", UserRole.TENANT),
            "is_active": data.get("is_active", True),
        }

        profile = await self.create(create_data)
        logger.info(f"Created profile: {profile.email} (ID: {profile.id})")
        return profile

    async def get_by_email(self, email: str) -> Optional[Profile]:
        normalized_email = email.lower().strip()
        result = await self.db.execute(select(Profile).where(Profile.email == normalized_email))
        return result.scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> Optional[Profile]:
        """
        Check email and password.

        Returns:
            The profile if the credentials match, None otherwise
        """
        profile = await self.get_by_email(email)

        if not profile:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not profile.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        return profile

    async def get_names(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, str]:
        """Map profile ids to full names in one query."""
        ids = list(set(user_ids))
        if not ids:
            return {}
        result = await self.db.execute(
            select(Profile.id, Profile.full_name).where(Profile.id.in_(ids))
        )
        return {row.id: row.full_name for row in result}

    async def has_role(self, user_id: uuid.UUID, role: AppRole) -> bool:
        """True when the profile holds the given application role grant."""
        result = await self.db.execute(
            select(func.count(UserRoleGrant.id)).where(
                UserRoleGrant.user_id == user_id,
                UserRoleGrant.role == role
            )
        )
        return (result.scalar() or 0) > 0

    async def grant_role(self, user_id: uuid.UUID, role: AppRole) -> None:
        if await self.has_role(user_id, role):
            return
        self.db.add(UserRoleGrant(user_id=user_id, role=role))
        await self.db.commit()
        logger.info(f"Granted {role.value} role to profile {user_id}")
