"""
Profile model with authentication and role management.
Handles accounts for tenants, caretakers, movers and administrators.
"""

from sqlalchemy import String, Boolean, Enum as SQLEnum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from nyumba.database import Base
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
import enum
import uuid
from typing import Optional

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def enum_values(enum_cls):
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]


class UserRole(str, enum.Enum):
    """Marketplace role of a profile."""
    TENANT = "tenant"
    CARETAKER = "caretaker"
    ADMIN = "admin"
    MOVER = "mover"


class AppRole(str, enum.Enum):
    """Application-level role grants stored in user_roles."""
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


class Profile(Base):
    """
    Profile model for authentication and authorization.
    One row per account; the marketplace role decides which features apply.
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login email address - must be unique and valid"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    user_role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        default=UserRole.TENANT,
        index=True,
        comment="Marketplace role for access control"
    )

    # AI assistant preferences
    ai_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    groq_api_key: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Personal Groq API key used for assistant requests"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email}, role={self.user_role})>"

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Returns:
            Normalized (lowercase) email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    @classmethod
    def hash_password(cls, password: str) -> str:
        if not password or len(password) < 8:
            raise ValueError("Password must be at least 8 characters long")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return pwd_context.verify(password, self.hashed_password)

    def set_password(self, password: str) -> None:
        self.hashed_password = self.hash_password(password)

    @property
    def is_admin(self) -> bool:
        return self.user_role == UserRole.ADMIN

    @property
    def is_caretaker(self) -> bool:
        return self.user_role == UserRole.CARETAKER

    @property
    def is_mover(self) -> bool:
        return self.user_role == UserRole.MOVER

    def can_manage_property(self, caretaker_id: uuid.UUID) -> bool:
        """Admins manage every listing; caretakers only their own."""
        if self.is_admin:
            return True
        return self.id == caretaker_id

    def to_dict(self) -> dict:
        """Private representation for the account owner (no secrets)."""
        return {
            "id": str(self.id),
            "email": self.email,
            "full_name": self.full_name,
            "phone": self.phone,
            "avatar_url": self.avatar_url,
            "user_role": self.user_role.value,
            "ai_enabled": self.ai_enabled,
            "has_groq_api_key": bool(self.groq_api_key),
            "is_active": self.is_active,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_public_dict(self) -> dict:
        """Contact card shown to other users."""
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "phone": self.phone,
            "avatar_url": self.avatar_url,
            "user_role": self.user_role.value,
        }


class UserRoleGrant(Base):
    """Application role granted to a profile (admin, moderator, user)."""

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    role: Mapped[AppRole] = mapped_column(
        SQLEnum(AppRole, name="app_role", values_callable=enum_values),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<UserRoleGrant(user_id={self.user_id}, role={self.role})>"
