"""
Pydantic schemas for profile requests and responses.
Handles registration, profile updates, and public contact cards.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from nyumba.models.user import UserRole


class ProfileBase(BaseModel):
    """Base profile schema with common fields."""

    email: EmailStr = Field(
        ...,
        description="Login email address",
        examples=["wanjiku@example.com"]
    )

    full_name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description="Display name",
        examples=["Wanjiku Kamau"]
    )

    phone: Optional[str] = Field(
        None,
        max_length=32,
        description="Contact phone number",
        examples=["+254712345678"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Full name cannot be empty")
        return v.strip()


class ProfileCreate(ProfileBase):
    """Schema for self-registration."""

    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (minimum 8 characters, letters and numbers)",
        examples=["securepassword123"]
    )

    user_role: UserRole = Field(
        UserRole.TENANT,
        description="Marketplace role; admin cannot be self-assigned",
        examples=["caretaker"]
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """Validate password strength."""
        has_letter = any(c.isalpha() for c in v)
        has_number = any(c.isdigit() for c in v)

        if not has_letter:
            raise ValueError("Password must contain at least one letter")

        if not has_number:
            raise ValueError("Password must contain at least one number")

        return v


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    full_name: Optional[str] = Field(None, min_length=2, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    avatar_url: Optional[str] = Field(None, max_length=500)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if v is not None:
            if not v.strip():
                raise ValueError("Full name cannot be empty")
            return v.strip()
        return v


class ProfileResponse(BaseModel):
    """Profile response schema (excluding secrets)."""

    id: str = Field(..., description="Profile identifier")
    email: EmailStr
    full_name: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    user_role: UserRole
    ai_enabled: bool = False
    has_groq_api_key: bool = False
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PublicProfileResponse(BaseModel):
    """Contact card shown on listings and in conversations."""

    id: str
    full_name: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    user_role: UserRole
