"""
Pydantic schemas for in-app messaging.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class MessageCreate(BaseModel):
    """Send a message to another profile, optionally about a listing."""

    receiver_id: UUID = Field(..., description="Recipient profile")
    content: str = Field(..., max_length=5000, examples=["Is the apartment still available?"])
    property_id: Optional[UUID] = Field(None, description="Listing the message is about")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        if not v or not v.strip():
            raise ValueError("Message cannot be empty")
        return v.strip()


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    property_id: Optional[str] = None
    content: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ConversationSummary(BaseModel):
    """One entry per conversation partner."""

    partner_id: str
    partner_name: str = Field(..., description="Partner's full name, or 'Unknown'")
    last_message: MessageResponse
    unread_count: int = Field(0, ge=0)


class ConversationListResponse(BaseModel):
    conversations: List[ConversationSummary]


class ThreadResponse(BaseModel):
    partner_id: str
    partner_name: str
    messages: List[MessageResponse]


class UnreadCountResponse(BaseModel):
    unread_count: int
