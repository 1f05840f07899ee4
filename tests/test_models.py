"""
Unit tests for models and listing presentation helpers.
"""

import uuid
from decimal import Decimal
from types import SimpleNamespace

import pytest

from nyumba.models.message import Message
from nyumba.models.mover import Mover, MoverService, VerificationStatus
from nyumba.models.property import PropertyType
from nyumba.models.user import Profile, UserRole
from nyumba.services.seed_catalog import (
    AFFORDABLE_CATALOG,
    CATALOGS,
    STANDARD_CATALOG,
    entry_to_property_data,
    resolve_property_type
)
from nyumba.utils.listing import (
    PLACEHOLDER_IMAGES,
    fallback_image_url,
    format_price,
    format_property_type,
    parse_amenities,
    select_display_image
)


class TestProfileModel:
    """Test cases for the Profile model."""

    def test_validate_email_format_normalizes(self):
        assert Profile.validate_email_format("Jane.Doe@Example.COM") == "jane.doe@example.com"

    def test_validate_email_format_rejects_invalid(self):
        with pytest.raises(ValueError, match="Invalid email format"):
            Profile.validate_email_format("not-an-email")

    def test_hash_password_requires_eight_characters(self):
        with pytest.raises(ValueError, match="at least 8 characters"):
            Profile.hash_password("short")

    def test_password_round_trip(self):
        profile = Profile(email="a@example.com", full_name="A", hashed_password=Profile.hash_password("secret123"))

        assert profile.verify_password("secret123")
        assert not profile.verify_password("wrong-password")

    def test_can_manage_property(self):
        owner_id = uuid.uuid4()
        caretaker = Profile(id=owner_id, user_role=UserRole.CARETAKER)
        other = Profile(id=uuid.uuid4(), user_role=UserRole.CARETAKER)
        admin = Profile(id=uuid.uuid4(), user_role=UserRole.ADMIN)

        assert caretaker.can_manage_property(owner_id)
        assert not other.can_manage_property(owner_id)
        assert admin.can_manage_property(owner_id)

    def test_to_dict_hides_groq_key(self):
        profile = Profile(
            id=uuid.uuid4(),
            email="a@example.com",
            full_name="A",
            user_role=UserRole.TENANT,
            ai_enabled=True,
            groq_api_key="gsk_secret",
            is_active=True
        )

        data = profile.to_dict()

        assert "groq_api_key" not in data
        assert data["has_groq_api_key"] is True
        assert "email" not in profile.to_public_dict()


class TestListingHelpers:
    """Test cases for listing presentation helpers."""

    @pytest.mark.parametrize("value,label", [
        ("three_bedroom_plus", "Three Bedroom Plus"),
        ("bedsitter", "Bedsitter"),
        ("one_bedroom", "One Bedroom"),
    ])
    def test_format_property_type(self, value, label):
        assert format_property_type(value) == label

    def test_parse_amenities_from_string(self):
        assert parse_amenities(" WiFi, Parking ,, Security ,") == ["WiFi", "Parking", "Security"]

    def test_parse_amenities_from_list(self):
        assert parse_amenities(["Gym", " ", "Pool "]) == ["Gym", "Pool"]
        assert parse_amenities(None) == []

    def test_fallback_image_is_stable(self):
        key = str(uuid.uuid4())

        first = fallback_image_url(key)

        assert first == fallback_image_url(key)
        assert first in PLACEHOLDER_IMAGES

    def test_select_display_image_uses_lowest_display_order(self):
        listing = SimpleNamespace(
            id=uuid.uuid4(),
            images=[
                SimpleNamespace(image_url="http://img/2.jpg", display_order=2),
                SimpleNamespace(image_url="http://img/0.jpg", display_order=0),
            ]
        )

        assert select_display_image(listing) == "http://img/0.jpg"

    def test_select_display_image_falls_back_to_placeholder(self):
        listing = SimpleNamespace(id=uuid.uuid4(), images=[])

        assert select_display_image(listing) == fallback_image_url(str(listing.id))

    @pytest.mark.parametrize("amount,text", [
        (Decimal("45000.00"), "45000"),
        (12500.5, "12500.50"),
        (None, "0"),
    ])
    def test_format_price(self, amount, text):
        assert format_price(amount) == text


class TestMessageModel:

    def test_partner_of(self):
        alice, bob = uuid.uuid4(), uuid.uuid4()
        message = Message(sender_id=alice, receiver_id=bob, content="Hi")

        assert message.partner_of(alice) == bob
        assert message.partner_of(bob) == alice


class TestMoverModel:

    def test_primary_service_is_first_service(self):
        first = MoverService(van_size="pickup", hourly_rate=Decimal("2000"))
        second = MoverService(van_size="lorry", hourly_rate=Decimal("6000"))
        mover = Mover(business_name="Swift", phone="0700", services=[first, second])

        assert mover.primary_service is first
        assert Mover(business_name="Empty", phone="0700", services=[]).primary_service is None

    def test_is_verified(self):
        mover = Mover(verification_status=VerificationStatus.VERIFIED.value)

        assert mover.is_verified
        assert not Mover(verification_status=VerificationStatus.PENDING.value).is_verified


class TestSeedCatalog:
    """Test cases for the demo listing catalogs."""

    @pytest.mark.parametrize("kind,rooms,expected", [
        ("bedsitter", 1, PropertyType.BEDSITTER),
        ("studio", 1, PropertyType.STUDIO),
        ("apartment", 1, PropertyType.ONE_BEDROOM),
        ("apartment", 2, PropertyType.TWO_BEDROOM),
        ("house", 3, PropertyType.THREE_BEDROOM_PLUS),
        ("house", 5, PropertyType.THREE_BEDROOM_PLUS),
    ])
    def test_resolve_property_type(self, kind, rooms, expected):
        assert resolve_property_type(kind, rooms) == expected

    def test_catalog_sizes(self):
        assert len(STANDARD_CATALOG) == 20
        assert len(AFFORDABLE_CATALOG) == 25
        assert set(CATALOGS) == {"standard", "affordable"}

    def test_titles_are_unique_within_a_catalog(self):
        for entries in CATALOGS.values():
            titles = [entry.title for entry in entries]
            assert len(titles) == len(set(titles))

    def test_entry_to_property_data(self):
        entry = STANDARD_CATALOG[0]

        data = entry_to_property_data(entry)

        assert data["title"] == "Modern 2BR Apartment in Kilimani"
        assert data["property_type"] == PropertyType.TWO_BEDROOM
        assert data["price"] == 45000
        assert data["amenities"] == ["Parking", "WiFi", "Security", "Backup Generator"]
