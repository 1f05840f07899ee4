"""
Groq chat-completions client used by the AI assistant.
"""

from typing import Any, Dict, List, Optional
import httpx
import logging

from nyumba.clients.base import BaseAPIClient
from nyumba.config import settings

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response generated"


class GroqClient(BaseAPIClient):

    service_name = "Groq"
    error_message = "AI service error. Please check your API key."

    def __init__(self, api_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(settings.groq_api_url, api_key, transport=transport)

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """Run a chat completion and return the first choice's text."""
        payload = {
            "model": settings.groq_model,
            "messages": messages,
            "temperature": settings.groq_temperature,
            "max_tokens": settings.groq_max_tokens,
        }
        logger.debug(f"Groq completion with {len(messages)} messages")
        data = await self.post_json(payload)
        return extract_completion_text(data)


def extract_completion_text(data: Dict[str, Any]) -> str:
    choices = data.get("choices") or []
    if not choices:
        return NO_RESPONSE
    message = choices[0].get("message") or {}
    return message.get("content") or NO_RESPONSE
