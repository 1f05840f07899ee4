"""
Tests for the AI assistant service and the Groq client.
Outbound HTTP is answered by httpx.MockTransport.
"""

import json
from decimal import Decimal

import httpx
import pytest

from nyumba.clients.groq import NO_RESPONSE, GroqClient, extract_completion_text
from nyumba.config import settings
from nyumba.models.property import PropertyStatus
from nyumba.schemas.assistant import AISettingsUpdate, AssistantRequest
from nyumba.services.assistant import (
    MISSING_KEY,
    SYSTEM_PROMPT,
    AssistantService,
    build_property_context,
    describe_property,
    get_suggestions
)
from nyumba.utils.exceptions import ExternalServiceError, ServiceNotConfiguredError
from tests.conftest import PropertyFactory


def completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it answered."""

    def __init__(self, status_code: int = 200, body=None):
        self.requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if isinstance(body, (dict, list)):
                return httpx.Response(status_code, json=body)
            return httpx.Response(status_code, text=body or "")

        super().__init__(handler)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def groq_key(monkeypatch):
    monkeypatch.setattr(settings, "groq_api_key", "server-key")
    return "server-key"


class TestPropertyContext:

    async def test_describe_property(self, property_repository, test_caretaker):
        listing = await PropertyFactory.create_property(
            property_repository, test_caretaker.id,
            title="Kilimani 2BR", price=Decimal("45000"), neighborhood="Yaya",
            description="Bright apartment", amenities=["Parking", "WiFi"]
        )

        line = describe_property(listing)

        assert line == (
            "- Kilimani 2BR (two_bedroom): 2 room(s) in Kilimani, Yaya at KSh 45000/month. "
            "Bright apartment... Amenities: Parking, WiFi"
        )

    def test_empty_context(self):
        assert build_property_context([]) == ""

    def test_suggestions(self):
        assert len(get_suggestions("listing")) == 3
        assert len(get_suggestions("move_cost")) == 1
        assert get_suggestions("unknown") == []
        assert get_suggestions(None) == []


class TestGroqClient:

    async def test_sends_model_and_bearer_key(self):
        transport = RecordingTransport(body=completion("Karibu!"))

        result = await GroqClient("user-key", transport=transport).complete([{"role": "user", "content": "Hi"}])

        assert result == "Karibu!"
        request = transport.requests[0]
        assert request.headers["Authorization"] == "Bearer user-key"
        assert transport.last_json["model"] == settings.groq_model
        assert transport.last_json["max_tokens"] == settings.groq_max_tokens

    async def test_error_status_raises(self):
        transport = RecordingTransport(status_code=401, body={"error": "invalid key"})

        with pytest.raises(ExternalServiceError, match="check your API key"):
            await GroqClient("bad-key", transport=transport).complete([{"role": "user", "content": "Hi"}])

    async def test_non_json_body_raises(self):
        with pytest.raises(ExternalServiceError):
            await GroqClient("key", transport=RecordingTransport(body="<html>")).complete([])

    def test_no_choices(self):
        assert extract_completion_text({"choices": []}) == NO_RESPONSE
        assert extract_completion_text({}) == NO_RESPONSE


class TestAssistantService:
    """Test cases for AssistantService."""

    async def test_prompt_with_context(self, db_session, groq_key):
        transport = RecordingTransport(body=completion("Try Roysambu."))
        assistant = AssistantService(db_session, transport=transport)

        result = await assistant.ask(AssistantRequest(
            prompt="Where can I live on 15k?",
            context={"type": "move_cost", "data": {"rooms": 1}}
        ))

        assert result == "Try Roysambu."
        messages = transport.last_json["messages"]
        assert messages[0]["role"] == "system"
        assert messages[0]["content"].startswith(SYSTEM_PROMPT)
        assert 'Context: {"type": "move_cost", "data": {"rooms": 1}}' in messages[0]["content"]
        assert "Available Properties" not in messages[0]["content"]
        assert messages[1] == {"role": "user", "content": "Where can I live on 15k?"}
        assert transport.requests[0].headers["Authorization"] == "Bearer server-key"

    async def test_chat_history_includes_available_listings(
        self, db_session, groq_key, property_repository, test_caretaker
    ):
        await PropertyFactory.create_property(property_repository, test_caretaker.id, title="Listed Flat")
        await PropertyFactory.create_property(
            property_repository, test_caretaker.id, title="Taken Flat", status=PropertyStatus.RENTED
        )
        transport = RecordingTransport(body=completion("Listed Flat fits."))

        await AssistantService(db_session, transport=transport).ask(AssistantRequest(
            messages=[
                {"role": "user", "content": "Anything in Kilimani?"},
                {"role": "assistant", "content": "What budget?"},
                {"role": "user", "content": "50k"},
            ],
            includeProperties=True
        ))

        messages = transport.last_json["messages"]
        assert len(messages) == 4
        assert "Available Properties:\n- Listed Flat" in messages[0]["content"]
        assert "Taken Flat" not in messages[0]["content"]

    async def test_listing_context_includes_listings(self, db_session, groq_key, test_property):
        transport = RecordingTransport(body=completion("Nice title."))

        await AssistantService(db_session, transport=transport).ask(AssistantRequest(
            prompt="Improve this title",
            context={"type": "listing", "data": {"title": test_property.title}}
        ))

        assert test_property.title in transport.last_json["messages"][0]["content"]
        assert "Available Properties" in transport.last_json["messages"][0]["content"]

    async def test_empty_choices(self, db_session, groq_key):
        transport = RecordingTransport(body={"choices": []})

        result = await AssistantService(db_session, transport=transport).ask(AssistantRequest(prompt="Hello"))

        assert result == NO_RESPONSE

    async def test_missing_key(self, db_session, monkeypatch):
        monkeypatch.setattr(settings, "groq_api_key", None)

        with pytest.raises(ServiceNotConfiguredError, match=MISSING_KEY):
            await AssistantService(db_session).ask(AssistantRequest(prompt="Hello"))

    async def test_personal_key_takes_precedence(self, db_session, groq_key, test_tenant):
        assistant = AssistantService(db_session)

        settings_state = await assistant.update_settings(test_tenant, AISettingsUpdate(groq_api_key=" personal "))
        assert settings_state == {"ai_enabled": True, "has_groq_api_key": True}
        assert assistant.resolve_api_key(test_tenant) == "personal"

        cleared = await assistant.clear_settings(test_tenant)
        assert cleared == {"ai_enabled": False, "has_groq_api_key": False}
        assert assistant.resolve_api_key(test_tenant) == "server-key"

    def test_prompt_or_messages_required(self):
        with pytest.raises(ValueError, match="Please enter a prompt"):
            AssistantRequest(prompt="   ")

    async def test_disabled_personal_key_is_ignored(self, db_session, groq_key, test_tenant):
        test_tenant.groq_api_key = "personal"
        test_tenant.ai_enabled = False

        assert AssistantService(db_session).resolve_api_key(test_tenant) == "server-key"
