"""
Tests for demo seeding with a mocked image-generation gateway.
"""

import base64
import json

import httpx
import pytest

from nyumba.clients.image_generation import ImageGenerationClient, decode_data_url, extract_image_url
from nyumba.config import settings
from nyumba.models.user import UserRole
from nyumba.repositories.image import ImageRepository
from nyumba.repositories.property import PropertyRepository
from nyumba.schemas.property import ListingSearchFilters
from nyumba.services.seed_catalog import AFFORDABLE, CATALOGS, STANDARD, STANDARD_CATALOG
from nyumba.services import seeding as seeding_module
from nyumba.services.seeding import SeedingService
from nyumba.utils.exceptions import BadRequestError, ExternalServiceError, ServiceNotConfiguredError
from tests.conftest import create_test_image

PNG_BYTES = create_test_image("PNG")
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


def image_reply(url: str = PNG_DATA_URL) -> dict:
    return {"choices": [{"message": {"role": "assistant", "images": [{"type": "image_url", "image_url": {"url": url}}]}}]}


def gateway(fail_when: str = None) -> httpx.MockTransport:
    """Answers with a PNG, or with a 500 for prompts containing fail_when."""
    def handler(request: httpx.Request) -> httpx.Response:
        prompt = json.loads(request.content)["messages"][0]["content"]
        if fail_when and fail_when in prompt:
            return httpx.Response(500, json={"error": "overloaded"})
        return httpx.Response(200, json=image_reply())

    return httpx.MockTransport(handler)


@pytest.fixture
def image_key(monkeypatch):
    monkeypatch.setattr(settings, "image_api_key", "image-key")


@pytest.fixture
def small_catalog(monkeypatch):
    entries = STANDARD_CATALOG[:3]
    monkeypatch.setitem(CATALOGS, STANDARD, entries)
    return entries


class TestDataUrls:

    def test_decode_data_url(self):
        content_type, data = decode_data_url(PNG_DATA_URL)

        assert content_type == "image/png"
        assert data == PNG_BYTES

    @pytest.mark.parametrize("value", ["https://example.com/a.png", "data:image/png;base64,@@@"])
    def test_decode_rejects_bad_values(self, value):
        with pytest.raises(ValueError):
            decode_data_url(value)

    def test_extract_image_url(self):
        assert extract_image_url(image_reply("data:x")) == "data:x"
        assert extract_image_url({"choices": [{"message": {"content": "no image"}}]}) is None

    async def test_generate_without_image(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"choices": []}))

        with pytest.raises(ExternalServiceError, match="No image"):
            await ImageGenerationClient("key", transport=transport).generate("a house")


class TestSeedingService:
    """Test cases for SeedingService."""

    async def test_seeds_catalog_with_images(self, db_session, file_storage, image_key, small_catalog):
        seeding = SeedingService(db_session, storage=file_storage, transport=gateway())

        result = await seeding.seed(STANDARD)

        assert result["success"] is True
        assert result["created"] == 3
        assert result["skipped"] == 0
        assert result["message"] == "Seeded 3 of 3 standard properties"

        listings, total = await PropertyRepository(db_session).search_listings(
            ListingSearchFilters()
        )
        assert total == 3
        for listing in listings:
            images = await ImageRepository(db_session).get_by_property_id(listing.id)
            assert len(images) == 1
            assert images[0].display_order == 0
            assert images[0].storage_path.startswith("seed/")
            assert (file_storage.root / images[0].storage_path).read_bytes() == PNG_BYTES

    async def test_failed_entry_is_skipped(self, db_session, file_storage, image_key, small_catalog):
        failing = small_catalog[1]
        seeding = SeedingService(db_session, storage=file_storage, transport=gateway(fail_when=failing.image_prompt))

        result = await seeding.seed(STANDARD)

        assert result["created"] == 2
        assert result["skipped"] == 1
        assert failing.title in result["details"]
        assert failing.title not in result["created_titles"]

    async def test_failed_insert_does_not_stop_later_entries(
        self, db_session, file_storage, image_key, small_catalog, monkeypatch
    ):
        failing = small_catalog[0]
        to_property_data = seeding_module.entry_to_property_data

        def without_title(entry):
            data = to_property_data(entry)
            if entry.title == failing.title:
                data["title"] = None
            return data

        monkeypatch.setattr(seeding_module, "entry_to_property_data", without_title)

        result = await SeedingService(db_session, storage=file_storage, transport=gateway()).seed(STANDARD)

        assert result["created"] == 2
        assert result["skipped"] == 1
        assert list(result["details"]) == [failing.title]
        assert result["created_titles"] == [entry.title for entry in small_catalog[1:]]

        _, total = await PropertyRepository(db_session).search_listings(ListingSearchFilters())
        assert total == 2

    async def test_demo_caretaker_is_reused(self, db_session, file_storage):
        seeding = SeedingService(db_session, storage=file_storage)

        first = await seeding.ensure_demo_caretaker()
        second = await seeding.ensure_demo_caretaker()

        assert first.id == second.id
        assert first.user_role == UserRole.CARETAKER
        assert first.email == settings.demo_caretaker_email

    async def test_affordable_style_is_photorealistic(self, db_session, file_storage, image_key, monkeypatch):
        monkeypatch.setitem(CATALOGS, AFFORDABLE, CATALOGS[AFFORDABLE][:1])
        prompts = []

        def handler(request: httpx.Request) -> httpx.Response:
            prompts.append(json.loads(request.content)["messages"][0]["content"])
            return httpx.Response(200, json=image_reply())

        await SeedingService(db_session, storage=file_storage, transport=httpx.MockTransport(handler)).seed(AFFORDABLE)

        assert prompts[0].endswith(", photorealistic")

    async def test_unknown_catalog(self, db_session, image_key):
        with pytest.raises(BadRequestError):
            await SeedingService(db_session).seed("luxury")

    async def test_missing_image_key(self, db_session, monkeypatch):
        monkeypatch.setattr(settings, "image_api_key", None)

        with pytest.raises(ServiceNotConfiguredError):
            await SeedingService(db_session).seed(STANDARD)
