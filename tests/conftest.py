"""
Test configuration and fixtures for the Nyumba API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os
import tempfile

# Settings are read when the package is imported
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="nyumba-test-")
os.environ.pop("GROQ_API_KEY", None)
os.environ.pop("IMAGE_API_KEY", None)

import io
import uuid
from datetime import date, timedelta
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image as PILImage
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from nyumba.database import Base, get_db
from nyumba.main import app
from nyumba.models.mover import Mover, VerificationStatus
from nyumba.models.property import Property, PropertyStatus, PropertyType
from nyumba.models.user import Profile, UserRole
from nyumba.repositories.image import ImageRepository
from nyumba.repositories.mover import MoverRepository, MoverServiceRepository
from nyumba.repositories.property import PropertyRepository
from nyumba.repositories.user import UserRepository
from nyumba.utils.auth import create_access_token
from nyumba.utils.dependencies import get_file_storage
from nyumba.utils.file_utils import FileStorage

TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def test_engine(tmp_path):
    """A fresh SQLite database file per test, with foreign keys enforced."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
def file_storage(tmp_path) -> FileStorage:
    """Object storage rooted in the test's temporary directory."""
    return FileStorage(
        base_dir=tmp_path / "storage",
        bucket="property-images",
        public_base_url="http://test/media"
    )


@pytest.fixture
async def async_client(session_factory, file_storage) -> AsyncGenerator[AsyncClient, None]:
    """
    Async test client. Every request gets its own session on the test
    database, as it would in production.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: file_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    return ImageRepository(db_session)


@pytest.fixture
def mover_repository(db_session: AsyncSession) -> MoverRepository:
    return MoverRepository(db_session)


# Test data factories
class ProfileFactory:
    """Factory for creating test profiles."""

    @staticmethod
    def create_profile_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        full_name: str = "Test User",
        user_role: UserRole = UserRole.TENANT,
        is_active: bool = True,
        phone: Optional[str] = "+254700000000"
    ) -> dict:
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "full_name": full_name,
            "user_role": user_role,
            "is_active": is_active,
            "phone": phone,
        }

    @staticmethod
    async def create_profile(user_repo: UserRepository, **kwargs) -> Profile:
        """Create a test profile in the database."""
        return await user_repo.create_profile(ProfileFactory.create_profile_data(**kwargs))


class PropertyFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_property_data(
        caretaker_id: uuid.UUID,
        title: str = "Modern Apartment in Kilimani",
        description: str = "Spacious apartment close to shopping centers and restaurants.",
        property_type: PropertyType = PropertyType.TWO_BEDROOM,
        price: Decimal = Decimal("45000"),
        deposit: Optional[Decimal] = Decimal("90000"),
        rooms: int = 2,
        location: str = "Kilimani",
        neighborhood: Optional[str] = "Yaya Centre",
        amenities: Optional[List[str]] = None,
        is_furnished: bool = False,
        utilities_included: bool = False,
        status: PropertyStatus = PropertyStatus.AVAILABLE
    ) -> dict:
        return {
            "caretaker_id": caretaker_id,
            "title": title,
            "description": description,
            "property_type": property_type,
            "price": price,
            "deposit": deposit,
            "rooms": rooms,
            "location": location,
            "neighborhood": neighborhood,
            "amenities": amenities if amenities is not None else ["Parking", "WiFi"],
            "is_furnished": is_furnished,
            "utilities_included": utilities_included,
            "status": status.value,
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, caretaker_id: uuid.UUID, **kwargs) -> Property:
        """Create a test listing in the database."""
        return await property_repo.create(PropertyFactory.create_property_data(caretaker_id, **kwargs))

    @staticmethod
    def api_payload(**overrides) -> dict:
        """JSON body for POST /properties."""
        payload = {
            "title": "Cozy Bedsitter in Roysambu",
            "description": "Affordable bedsitter near Thika Road Mall with reliable water supply.",
            "property_type": "bedsitter",
            "price": 12000,
            "deposit": 12000,
            "rooms": 1,
            "location": "Roysambu",
            "neighborhood": "TRM",
            "amenities": "Water, Security, ",
            "is_furnished": False,
            "utilities_included": True,
        }
        payload.update(overrides)
        return payload


class MoverFactory:
    """Factory for creating test movers with an optional van service."""

    @staticmethod
    async def create_mover(
        db_session: AsyncSession,
        user_id: uuid.UUID,
        business_name: str = "Swift Movers Nairobi",
        service_areas: Optional[List[str]] = None,
        verification_status: VerificationStatus = VerificationStatus.VERIFIED,
        rating: Decimal = Decimal("4.50"),
        van_size: Optional[str] = "pickup",
        hourly_rate: Decimal = Decimal("2500"),
        fixed_rate: Optional[Decimal] = Decimal("8000")
    ) -> Mover:
        mover_repo = MoverRepository(db_session)
        mover = await mover_repo.create({
            "user_id": user_id,
            "business_name": business_name,
            "phone": "+254711111111",
            "rating": rating,
            "service_areas": service_areas if service_areas is not None else ["Westlands", "Kilimani"],
            "verification_status": verification_status.value,
        })
        if van_size is not None:
            await MoverServiceRepository(db_session).create({
                "mover_id": mover.id,
                "van_size": van_size,
                "hourly_rate": hourly_rate,
                "fixed_rate": fixed_rate,
            })
            mover = await mover_repo.reload(mover.id)
        return mover


def create_test_image(fmt: str = "JPEG", size=(64, 48), color: str = "red") -> bytes:
    """Encode a small solid-color image with Pillow."""
    buffer = io.BytesIO()
    PILImage.new("RGB", size, color=color).save(buffer, format=fmt)
    return buffer.getvalue()


def auth_headers(profile: Profile) -> Dict[str, str]:
    """Bearer header for a profile."""
    token = create_access_token(user_id=profile.id, email=profile.email, role=profile.user_role)
    return {"Authorization": f"Bearer {token}"}


def future_date(days: int = 7) -> date:
    return date.today() + timedelta(days=days)


# Test data fixtures
@pytest.fixture
async def test_tenant(user_repository: UserRepository) -> Profile:
    return await ProfileFactory.create_profile(
        user_repository,
        email="tenant@example.com",
        full_name="Wanjiku Tenant",
        user_role=UserRole.TENANT
    )


@pytest.fixture
async def test_caretaker(user_repository: UserRepository) -> Profile:
    return await ProfileFactory.create_profile(
        user_repository,
        email="caretaker@example.com",
        full_name="Otieno Caretaker",
        user_role=UserRole.CARETAKER
    )


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> Profile:
    return await ProfileFactory.create_profile(
        user_repository,
        email="admin@example.com",
        full_name="Admin User",
        user_role=UserRole.ADMIN
    )


@pytest.fixture
async def test_mover_user(user_repository: UserRepository) -> Profile:
    return await ProfileFactory.create_profile(
        user_repository,
        email="mover@example.com",
        full_name="Kamau Mover",
        user_role=UserRole.MOVER
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_caretaker: Profile) -> Property:
    return await PropertyFactory.create_property(property_repository, test_caretaker.id)


@pytest.fixture
async def test_mover(db_session: AsyncSession, test_mover_user: Profile) -> Mover:
    return await MoverFactory.create_mover(db_session, test_mover_user.id)
