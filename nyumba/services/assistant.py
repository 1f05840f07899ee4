"""
AI assistant service: builds the housing-assistant conversation and relays
it to the Groq chat-completions API.
"""

import json
from typing import Dict, List, Optional, Sequence
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession
import httpx
import logging

from nyumba.clients.groq import GroqClient
from nyumba.config import settings
from nyumba.models.property import Property
from nyumba.models.user import Profile
from nyumba.repositories.property import PropertyRepository
from nyumba.repositories.user import UserRepository
from nyumba.schemas.assistant import AISettingsUpdate, AssistantRequest
from nyumba.utils.exceptions import ServiceNotConfiguredError
from nyumba.utils.listing import format_price

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful AI assistant for a housing rental platform in Nairobi, Kenya.

Your role is to help users find their perfect home by:
- Understanding their budget, location preferences, and requirements
- Recommending suitable properties from the available listings
- Answering questions about neighborhoods, amenities, and property features
- Providing guidance on rental processes and moving

Be conversational, friendly, and helpful. When recommending properties, mention specific details like location, price, and key features. Always prioritize the user's stated budget and requirements."""

PROMPT_SUGGESTIONS: Dict[str, List[str]] = {
    "listing": [
        "Improve this listing title and write a compelling 25-word summary",
        "Suggest ways to make this listing more attractive to tenants",
        "Analyze the pricing compared to similar properties in the area",
    ],
    "tenant_match": [
        "Score this property for a tenant looking for affordable housing in this neighborhood",
        "What are the top 3 selling points for budget-conscious tenants?",
    ],
    "move_cost": [
        "Estimate the moving cost and suggest the appropriate van size",
    ],
}

MISSING_KEY = "Groq API key not configured on server"


def describe_property(property_obj: Property) -> str:
    """One "Available Properties" line for the system prompt."""
    where = property_obj.location
    if property_obj.neighborhood:
        where = f"{where}, {property_obj.neighborhood}"
    description = (property_obj.description or "")[:100]
    amenities = ", ".join(property_obj.amenities or [])
    return (
        f"- {property_obj.title} ({property_obj.property_type.value}): "
        f"{property_obj.rooms} room(s) in {where} at KSh {format_price(property_obj.price)}/month. "
        f"{description}... Amenities: {amenities}"
    )


def build_property_context(properties: Sequence[Property]) -> str:
    if not properties:
        return ""
    return "\n\nAvailable Properties:\n" + "\n".join(describe_property(p) for p in properties)


def get_suggestions(context_type: Optional[str]) -> List[str]:
    return list(PROMPT_SUGGESTIONS.get(context_type or "", []))


class AssistantService:

    def __init__(self, db_session: AsyncSession, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.user_repo = UserRepository(db_session)
        self._transport = transport

    def resolve_api_key(self, user: Optional[Profile]) -> str:
        """
        The user's own key when they have enabled AI, else the server key.

        Raises:
            ServiceNotConfiguredError: If neither key is available
        """
        if user is not None and user.ai_enabled and user.groq_api_key:
            return user.groq_api_key
        if settings.groq_api_key:
            return settings.groq_api_key
        logger.error("Assistant request rejected: no Groq API key available")
        raise ServiceNotConfiguredError(MISSING_KEY)

    async def build_messages(self, request: AssistantRequest) -> List[Dict[str, str]]:
        system_prompt = SYSTEM_PROMPT

        if request.messages:
            include_properties = request.include_properties
            conversation = [message.model_dump() for message in request.messages]
        else:
            include_properties = request.include_properties or (
                request.context is not None and request.context.type == "listing"
            )
            conversation = [{"role": "user", "content": request.prompt.strip()}]
            if request.context is not None:
                context_json = json.dumps(jsonable_encoder(request.context), ensure_ascii=False)
                system_prompt = f"{system_prompt}\n\nContext: {context_json}"

        if include_properties:
            properties = await self.property_repo.get_recent_available(settings.assistant_listing_limit)
            system_prompt += build_property_context(properties)

        return [{"role": "system", "content": system_prompt}] + conversation

    async def ask(self, request: AssistantRequest, user: Optional[Profile] = None) -> str:
        api_key = self.resolve_api_key(user)
        messages = await self.build_messages(request)

        client = GroqClient(api_key, transport=self._transport)
        result = await client.complete(messages)

        logger.info(f"Assistant answered for {user.email if user else 'anonymous user'} ({len(result)} chars)")
        return result

    async def get_settings(self, user: Profile) -> dict:
        return {"ai_enabled": user.ai_enabled, "has_groq_api_key": bool(user.groq_api_key)}

    async def update_settings(self, user: Profile, data: AISettingsUpdate) -> dict:
        updated = await self.user_repo.update(user.id, {
            "groq_api_key": data.groq_api_key,
            "ai_enabled": data.ai_enabled,
        })
        logger.info(f"AI settings saved for {user.email} (enabled={data.ai_enabled})")
        return await self.get_settings(updated)

    async def clear_settings(self, user: Profile) -> dict:
        updated = await self.user_repo.update(user.id, {"groq_api_key": None, "ai_enabled": False})
        logger.info(f"AI settings cleared for {user.email}")
        return await self.get_settings(updated)
