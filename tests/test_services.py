"""
Unit tests for service layer business logic.
"""

import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import Mock

import pytest

from nyumba.models.booking import MoveRequestStatus
from nyumba.models.message import Message
from nyumba.models.mover import Mover, MoverService, VerificationStatus
from nyumba.models.property import PropertyStatus, PropertyType
from nyumba.models.user import AppRole, UserRole
from nyumba.repositories.image import ImageRepository
from nyumba.repositories.mover import MoverRepository
from nyumba.repositories.saved import SavedPropertyRepository
from nyumba.repositories.user import UserRepository
from nyumba.schemas.booking import MoveRequestCreate
from nyumba.schemas.mover import MoverCreate, MoverReviewCreate, MoverServiceCreate
from nyumba.schemas.property import PropertyCreate, PropertyUpdate
from nyumba.schemas.user import ProfileCreate
from nyumba.services.auth import AuthService
from nyumba.services.bookings import MISSING_FIELDS, SIGN_IN_REQUIRED, BookingService, estimate_from_mover
from nyumba.services.favorites import FavoritesService
from nyumba.services.image import ImageService
from nyumba.services.messaging import MessagingService, group_conversations
from nyumba.services.movers import MoversService, average_rating
from nyumba.services.notifier import MessageNotifier
from nyumba.services.property import PropertyService
from nyumba.utils.exceptions import (
    BadRequestError,
    ConflictError,
    DuplicateResourceError,
    ForbiddenError,
    InactiveUserError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidTokenError,
    MoverNotFoundError,
    NotFoundError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    UnauthorizedError,
    ValidationError
)
from tests.conftest import MoverFactory, ProfileFactory, PropertyFactory, TEST_PASSWORD, future_date


class TestAuthService:
    """Test cases for AuthService."""

    async def test_register_returns_tokens(self, db_session):
        auth_service = AuthService(db_session)

        profile, access_token, refresh_token = await auth_service.register(ProfileCreate(
            email="new@example.com",
            password=TEST_PASSWORD,
            full_name="New Caretaker",
            user_role=UserRole.CARETAKER
        ))

        assert profile.user_role == UserRole.CARETAKER
        assert (await auth_service.get_current_user(access_token)).id == profile.id
        assert await auth_service.refresh_access_token(refresh_token)

    async def test_register_rejects_admin_role(self, db_session):
        with pytest.raises(InsufficientPermissionsError):
            await AuthService(db_session).register(ProfileCreate(
                email="sneaky@example.com",
                password=TEST_PASSWORD,
                full_name="Sneaky",
                user_role=UserRole.ADMIN
            ))

    async def test_register_duplicate_email(self, db_session, test_tenant):
        with pytest.raises(DuplicateResourceError):
            await AuthService(db_session).register(ProfileCreate(
                email=test_tenant.email,
                password=TEST_PASSWORD,
                full_name="Again"
            ))

    async def test_login_invalid_password(self, db_session, test_tenant):
        with pytest.raises(InvalidCredentialsError):
            await AuthService(db_session).login(test_tenant.email, "wrong-password")

    async def test_login_inactive_profile(self, db_session, user_repository):
        inactive = await ProfileFactory.create_profile(user_repository, is_active=False)

        with pytest.raises(InactiveUserError):
            await AuthService(db_session).login(inactive.email, TEST_PASSWORD)

    async def test_login_requires_both_fields(self):
        auth_service = AuthService(Mock())

        with pytest.raises(ValidationError):
            await auth_service.authenticate_user("  ", TEST_PASSWORD)

    async def test_access_token_cannot_refresh(self, db_session, test_tenant):
        auth_service = AuthService(db_session)
        access_token, _ = auth_service.create_tokens(test_tenant)

        with pytest.raises(InvalidTokenError):
            await auth_service.refresh_access_token(access_token)

    async def test_is_admin_through_role_grant(self, db_session, test_caretaker):
        auth_service = AuthService(db_session)
        assert not await auth_service.is_admin(test_caretaker)

        await UserRepository(db_session).grant_role(test_caretaker.id, AppRole.ADMIN)

        assert await auth_service.is_admin(test_caretaker)


class TestPropertyService:
    """Test cases for PropertyService."""

    def _create_data(self, **overrides) -> PropertyCreate:
        return PropertyCreate(**PropertyFactory.api_payload(**overrides))

    async def test_caretaker_posts_available_listing(self, db_session, test_caretaker):
        property_obj = await PropertyService(db_session).create_property(self._create_data(), test_caretaker)

        assert property_obj.caretaker_id == test_caretaker.id
        assert property_obj.status == PropertyStatus.AVAILABLE.value
        assert property_obj.property_type == PropertyType.BEDSITTER
        assert property_obj.amenities == ["Water", "Security"]

    async def test_tenant_cannot_post(self, db_session, test_tenant):
        with pytest.raises(InsufficientPermissionsError):
            await PropertyService(db_session).create_property(self._create_data(), test_tenant)

    async def test_only_owner_or_admin_updates(self, db_session, test_property, test_tenant, test_admin):
        property_service = PropertyService(db_session)
        changes = PropertyUpdate(price=Decimal("50000"), neighborhood="  ")

        with pytest.raises(PropertyOwnershipError):
            await property_service.update_property(test_property.id, changes, test_tenant)

        updated = await property_service.update_property(test_property.id, changes, test_admin)
        assert updated.price == Decimal("50000")
        assert updated.neighborhood is None

    async def test_update_without_fields(self, db_session, test_property, test_caretaker):
        with pytest.raises(ValidationError):
            await PropertyService(db_session).update_property(test_property.id, PropertyUpdate(), test_caretaker)

    async def test_set_status_hides_from_search(self, db_session, test_property, test_caretaker):
        property_service = PropertyService(db_session)

        updated = await property_service.set_status(test_property.id, PropertyStatus.RENTED, test_caretaker)

        assert updated.status == "rented"
        assert await property_service.get_featured_properties() == []
        assert len(await property_service.get_my_properties(test_caretaker)) == 1

    async def test_delete_missing_listing(self, db_session, test_caretaker):
        with pytest.raises(PropertyNotFoundError):
            await PropertyService(db_session).delete_property(uuid.uuid4(), test_caretaker)

    async def test_delete_removes_row_then_files(self, db_session, test_property, test_caretaker, file_storage):
        await file_storage.store_bytes("c/p/1-0.jpg", b"photo", "image/jpeg")
        await ImageRepository(db_session).add_many([{
            "property_id": test_property.id,
            "image_url": file_storage.public_url("c/p/1-0.jpg"),
            "storage_path": "c/p/1-0.jpg",
            "display_order": 0,
        }])
        property_service = PropertyService(db_session, image_service=ImageService(db_session, storage=file_storage))

        assert await property_service.delete_property(test_property.id, test_caretaker)

        assert not (file_storage.root / "c/p/1-0.jpg").exists()

    async def test_failed_delete_keeps_files(self, db_session, test_property, test_caretaker, file_storage, monkeypatch):
        await file_storage.store_bytes("c/p/1-0.jpg", b"photo", "image/jpeg")
        await ImageRepository(db_session).add_many([{
            "property_id": test_property.id,
            "image_url": file_storage.public_url("c/p/1-0.jpg"),
            "storage_path": "c/p/1-0.jpg",
            "display_order": 0,
        }])
        property_service = PropertyService(db_session, image_service=ImageService(db_session, storage=file_storage))

        async def failing_delete(property_id):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(property_service.property_repo, "delete", failing_delete)

        with pytest.raises(RuntimeError):
            await property_service.delete_property(test_property.id, test_caretaker)

        assert (file_storage.root / "c/p/1-0.jpg").read_bytes() == b"photo"

    async def test_featured_limit_bounds(self, db_session):
        with pytest.raises(ValidationError):
            await PropertyService(db_session).get_featured_properties(limit=0)


class TestFavoritesService:
    """Test cases for saved listings."""

    async def test_toggle_twice_restores_state(self, db_session, test_tenant, test_property):
        favorites = FavoritesService(db_session)

        assert await favorites.toggle(test_tenant, test_property.id) is True
        assert await favorites.is_saved(test_tenant, test_property.id)

        assert await favorites.toggle(test_tenant, test_property.id) is False
        assert not await favorites.is_saved(test_tenant, test_property.id)

    async def test_save_is_idempotent(self, db_session, test_tenant, test_property):
        favorites = FavoritesService(db_session)

        await favorites.save(test_tenant, test_property.id)
        await favorites.save(test_tenant, test_property.id)

        saved = await favorites.list_saved(test_tenant)
        assert [p.id for p in saved] == [test_property.id]

    async def test_save_unknown_listing(self, db_session, test_tenant):
        with pytest.raises(PropertyNotFoundError):
            await FavoritesService(db_session).save(test_tenant, uuid.uuid4())

    async def test_unsave_when_not_saved(self, db_session, test_tenant, test_property):
        assert await FavoritesService(db_session).unsave(test_tenant, test_property.id) is False

    async def test_save_when_pair_inserted_concurrently(self, db_session, test_tenant, test_property, monkeypatch):
        favorites = FavoritesService(db_session)
        tenant_id, property_id = test_tenant.id, test_property.id
        await favorites.save(test_tenant, property_id)

        async def not_saved_yet(user, listing_id):
            return False

        monkeypatch.setattr(favorites, "is_saved", not_saved_yet)

        assert await favorites.save(test_tenant, property_id) is True

        rows = await SavedPropertyRepository(db_session).get_for_user(tenant_id)
        assert [row.property_id for row in rows] == [property_id]


class TestGroupConversations:
    """Test cases for collapsing messages into conversations."""

    def _message(self, sender, receiver, content, minutes, read=False) -> Message:
        return Message(
            id=uuid.uuid4(),
            sender_id=sender,
            receiver_id=receiver,
            content=content,
            read=read,
            created_at=datetime(2025, 1, 1, 12, 0) + timedelta(minutes=minutes)
        )

    def test_one_entry_per_partner_newest_first(self):
        me, alice, bob = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        messages = [
            self._message(alice, me, "Hi from Alice", 1),
            self._message(me, alice, "Hello Alice", 2),
            self._message(bob, me, "Is it available?", 3),
            self._message(alice, me, "Are you there?", 4),
            self._message(bob, me, "Old read message", 0, read=True),
        ]

        conversations = group_conversations(messages, me, {alice: "Alice"})

        assert [c["partner_id"] for c in conversations] == [str(alice), str(bob)]
        assert conversations[0]["last_message"]["content"] == "Are you there?"
        assert conversations[0]["unread_count"] == 2
        assert conversations[1]["partner_name"] == "Unknown"
        assert conversations[1]["unread_count"] == 1

    def test_sent_messages_are_never_unread(self):
        me, alice = uuid.uuid4(), uuid.uuid4()

        conversations = group_conversations([self._message(me, alice, "Hello", 0)], me, {alice: "Alice"})

        assert conversations[0]["unread_count"] == 0

    def test_empty(self):
        assert group_conversations([], uuid.uuid4(), {}) == []


class TestMessagingService:
    """Test cases for MessagingService."""

    async def test_send_notifies_receiver(self, db_session, test_tenant, test_caretaker, test_property):
        notifier = MessageNotifier()
        messaging = MessagingService(db_session, notifier=notifier)

        async with notifier.subscribe(test_caretaker.id) as queue:
            message = await messaging.send_message(test_tenant, test_caretaker.id, "  Is it available?  ", test_property.id)

            assert message.content == "Is it available?"
            assert queue.get_nowait() == {"event": "message", "message_id": str(message.id)}

    async def test_send_validation(self, db_session, test_tenant):
        messaging = MessagingService(db_session, notifier=MessageNotifier())

        with pytest.raises(BadRequestError, match="empty"):
            await messaging.send_message(test_tenant, uuid.uuid4(), "   ")
        with pytest.raises(BadRequestError, match="yourself"):
            await messaging.send_message(test_tenant, test_tenant.id, "Hello me")
        with pytest.raises(NotFoundError):
            await messaging.send_message(test_tenant, uuid.uuid4(), "Hello?")

    async def test_thread_marks_received_messages_read(self, db_session, test_tenant, test_caretaker):
        messaging = MessagingService(db_session, notifier=MessageNotifier())
        await messaging.send_message(test_tenant, test_caretaker.id, "Hello")
        await messaging.send_message(test_caretaker, test_tenant.id, "Hi there")

        assert await messaging.unread_count(test_caretaker) == 1

        conversations = await messaging.list_conversations(test_caretaker)
        assert conversations[0]["partner_name"] == "Wanjiku Tenant"
        assert conversations[0]["unread_count"] == 1

        thread = await messaging.get_thread(test_caretaker, test_tenant.id)
        assert [m["content"] for m in thread["messages"]] == ["Hello", "Hi there"]
        assert await messaging.unread_count(test_caretaker) == 0
        assert await messaging.unread_count(test_tenant) == 1


class TestMoversService:
    """Test cases for the movers marketplace."""

    def test_average_rating(self):
        assert average_rating([5, 4, 4], Decimal("3.0")) == 4.33
        assert average_rating([], Decimal("4.50")) == 4.5
        assert average_rating([], None) == 0.0

    async def test_list_movers_filters_by_area(self, db_session, user_repository):
        westlands = await ProfileFactory.create_profile(user_repository, user_role=UserRole.MOVER)
        karen = await ProfileFactory.create_profile(user_repository, user_role=UserRole.MOVER)
        pending = await ProfileFactory.create_profile(user_repository, user_role=UserRole.MOVER)
        await MoverFactory.create_mover(db_session, westlands.id, business_name="Westlands Movers",
                                        service_areas=["Westlands"])
        await MoverFactory.create_mover(db_session, karen.id, business_name="Karen Movers", service_areas=["Karen"])
        await MoverFactory.create_mover(db_session, pending.id, business_name="Pending Movers",
                                        service_areas=["Westlands"], verification_status=VerificationStatus.PENDING)
        movers_service = MoversService(db_session)

        assert [m.business_name for m in await movers_service.list_movers("Westlands")] == ["Westlands Movers"]
        assert len(await movers_service.list_movers("all")) == 2
        assert len(await movers_service.list_movers(None)) == 2

    async def test_register_mover_sets_role(self, db_session, test_tenant):
        movers_service = MoversService(db_session)
        data = MoverCreate(business_name="Tenant Movers", phone="+254722000000", service_areas=["Kilimani"])

        mover = await movers_service.register_mover(data, test_tenant)

        assert mover.verification_status == VerificationStatus.PENDING.value
        assert (await UserRepository(db_session).reload(test_tenant.id)).user_role == UserRole.MOVER

        with pytest.raises(ConflictError):
            await movers_service.register_mover(data, test_tenant)

    async def test_only_owner_adds_services(self, db_session, test_mover, test_mover_user, test_tenant):
        movers_service = MoversService(db_session)
        data = MoverServiceCreate(van_size="lorry", hourly_rate=Decimal("6000"))

        with pytest.raises(ForbiddenError):
            await movers_service.add_service(test_mover.id, data, test_tenant)

        service = await movers_service.add_service(test_mover.id, data, test_mover_user)
        assert service.van_size == "lorry"

    async def test_reviews(self, db_session, test_mover, test_mover_user, test_tenant):
        movers_service = MoversService(db_session)

        with pytest.raises(BadRequestError):
            await movers_service.add_review(test_mover.id, MoverReviewCreate(rating=5), test_mover_user)

        review = await movers_service.add_review(test_mover.id, MoverReviewCreate(rating=4, comment="Careful"), test_tenant)
        assert review.reviewer_id == test_tenant.id

    async def test_get_unknown_mover(self, db_session):
        with pytest.raises(MoverNotFoundError):
            await MoversService(db_session).get_mover(uuid.uuid4())


class TestBookingService:
    """Test cases for move bookings."""

    def _request(self, mover_id, **overrides) -> MoveRequestCreate:
        data = {
            "mover_id": mover_id,
            "move_date": future_date(),
            "pickup_location": "Kilimani",
            "dropoff_location": "Westlands",
        }
        data.update(overrides)
        return MoveRequestCreate(**data)

    def test_estimate_prefers_fixed_rate(self):
        mover = Mover(services=[MoverService(van_size="3-tonne", hourly_rate=Decimal("3000"), fixed_rate=Decimal("9000"))])

        assert estimate_from_mover(mover) == (Decimal("9000"), "3-tonne")

    def test_estimate_falls_back_to_hourly_rate(self):
        mover = Mover(services=[MoverService(van_size="", hourly_rate=Decimal("2500"), fixed_rate=None)])

        assert estimate_from_mover(mover) == (Decimal("2500"), "pickup")

    def test_estimate_without_services(self):
        assert estimate_from_mover(Mover(services=[])) == (Decimal("0"), "pickup")

    async def test_requires_sign_in(self):
        with pytest.raises(UnauthorizedError, match=SIGN_IN_REQUIRED):
            await BookingService(Mock()).book_mover(None, self._request(uuid.uuid4()))

    @pytest.mark.parametrize("overrides", [
        {"move_date": None},
        {"pickup_location": "   "},
        {"dropoff_location": None},
    ])
    async def test_missing_fields_rejected_before_any_query(self, test_tenant, overrides):
        session = Mock()

        with pytest.raises(BadRequestError, match=MISSING_FIELDS):
            await BookingService(session).book_mover(test_tenant, self._request(uuid.uuid4(), **overrides))

        session.execute.assert_not_called()

    async def test_past_date_rejected(self, db_session, test_tenant, test_mover):
        with pytest.raises(BadRequestError, match="past"):
            await BookingService(db_session).book_mover(
                test_tenant, self._request(test_mover.id, move_date=date.today() - timedelta(days=1))
            )

    async def test_book_mover_creates_pending_request(self, db_session, test_tenant, test_mover):
        move_request = await BookingService(db_session).book_mover(test_tenant, self._request(test_mover.id))

        assert move_request.status == MoveRequestStatus.PENDING.value
        assert move_request.estimated_cost == Decimal("8000")
        assert move_request.van_size == "pickup"
        assert move_request.tenant_id == test_tenant.id

    async def test_unknown_mover(self, db_session, test_tenant):
        with pytest.raises(MoverNotFoundError):
            await BookingService(db_session).book_mover(test_tenant, self._request(uuid.uuid4()))

    async def test_status_transitions(self, db_session, test_tenant, test_mover, test_mover_user, test_caretaker):
        booking_service = BookingService(db_session)
        move_request = await booking_service.book_mover(test_tenant, self._request(test_mover.id))

        with pytest.raises(ForbiddenError):
            await booking_service.update_booking_status(move_request.id, MoveRequestStatus.ACCEPTED, test_caretaker)
        with pytest.raises(ValidationError):
            await booking_service.update_booking_status(move_request.id, MoveRequestStatus.ACCEPTED, test_tenant)
        with pytest.raises(ValidationError):
            await booking_service.update_booking_status(move_request.id, MoveRequestStatus.CANCELLED, test_mover_user)

        accepted = await booking_service.update_booking_status(
            move_request.id, MoveRequestStatus.ACCEPTED, test_mover_user
        )
        assert accepted.status == "accepted"

        await booking_service.update_booking_status(move_request.id, MoveRequestStatus.COMPLETED, test_mover_user)
        mover = await MoverRepository(db_session).reload(test_mover.id)
        assert mover.total_jobs == 1

        with pytest.raises(ValidationError):
            await booking_service.update_booking_status(move_request.id, MoveRequestStatus.ACCEPTED, test_mover_user)
        await booking_service.update_booking_status(move_request.id, MoveRequestStatus.COMPLETED, test_mover_user)
        mover = await MoverRepository(db_session).reload(test_mover.id)
        assert mover.total_jobs == 1

        assert [r.id for r in await booking_service.my_bookings(test_tenant)] == [move_request.id]
        assert [r.id for r in await booking_service.mover_requests(test_mover_user)] == [move_request.id]

    async def test_mover_requests_without_profile(self, db_session, test_tenant):
        with pytest.raises(MoverNotFoundError):
            await BookingService(db_session).mover_requests(test_tenant)
