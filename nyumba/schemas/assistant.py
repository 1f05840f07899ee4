"""
Pydantic schemas for the AI assistant and demo seeding endpoints.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Dict, List, Literal, Optional


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class AssistantContext(BaseModel):
    """Page context the assistant was opened from."""

    type: Literal["listing", "tenant_match", "move_cost"]
    data: Optional[Any] = None


class AssistantRequest(BaseModel):
    """
    Either a single prompt with optional page context, or a full chat history.
    """

    prompt: Optional[str] = Field(None, max_length=4000, examples=["Find me a furnished bedsitter under 20k"])
    context: Optional[AssistantContext] = None
    messages: Optional[List[ChatMessage]] = None
    include_properties: bool = Field(False, alias="includeProperties")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_prompt_or_messages(self):
        has_prompt = bool(self.prompt and self.prompt.strip())
        if not has_prompt and not self.messages:
            raise ValueError("Please enter a prompt")
        return self


class AssistantResponse(BaseModel):
    result: str


class AISettingsUpdate(BaseModel):
    groq_api_key: str = Field(..., max_length=255)
    ai_enabled: bool = True

    @field_validator("groq_api_key")
    @classmethod
    def validate_key(cls, v):
        if not v or not v.strip():
            raise ValueError("Please enter a valid API key")
        return v.strip()


class AISettingsResponse(BaseModel):
    ai_enabled: bool
    has_groq_api_key: bool


class SuggestionsResponse(BaseModel):
    context_type: Optional[str] = None
    suggestions: List[str]


class SeedResponse(BaseModel):
    success: bool
    message: str
    created: int
    skipped: int
    created_titles: List[str] = Field(default_factory=list)
    details: Dict[str, str] = Field(default_factory=dict, description="Skip reason per title")
