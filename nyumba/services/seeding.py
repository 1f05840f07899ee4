"""
Demo data seeding: fills the marketplace with catalog listings illustrated
by generated photos.
"""

import secrets
import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import httpx
import logging

from nyumba.clients.image_generation import ImageGenerationClient
from nyumba.config import settings
from nyumba.models.property import PropertyStatus
from nyumba.models.user import Profile, UserRole
from nyumba.repositories.image import ImageRepository
from nyumba.repositories.property import PropertyRepository
from nyumba.repositories.user import UserRepository
from nyumba.services.seed_catalog import CATALOG_STYLES, CATALOGS, STANDARD, CatalogEntry, entry_to_property_data
from nyumba.utils.exceptions import APIException, BadRequestError, ServiceNotConfiguredError
from nyumba.utils.file_utils import FileStorage, FileValidator

logger = logging.getLogger(__name__)

DEMO_CARETAKER_NAME = "Demo Caretaker"


class SeedingService:
    """
    Creates every catalog listing in turn. A listing whose image or insert
    fails is logged and skipped; nothing already created is rolled back.
    """

    def __init__(
        self,
        db_session: AsyncSession,
        storage: Optional[FileStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.image_repo = ImageRepository(db_session)
        self.storage = storage or FileStorage()
        self._transport = transport

    async def ensure_demo_caretaker(self) -> Profile:
        caretaker = await self.user_repo.get_by_email(settings.demo_caretaker_email)
        if caretaker:
            return caretaker

        caretaker = await self.user_repo.create_profile({
            "email": settings.demo_caretaker_email,
            "password": secrets.token_urlsafe(24),
            "full_name": DEMO_CARETAKER_NAME,
            "user_role": UserRole.CARETAKER,
        })
        logger.info(f"Created demo caretaker {caretaker.email}")
        return caretaker

    async def seed(self, catalog: str = STANDARD) -> dict:
        """
        Seed one catalog.

        Raises:
            BadRequestError: If the catalog name is unknown
            ServiceNotConfiguredError: If no image API key is configured
        """
        if catalog not in CATALOGS:
            raise BadRequestError(f"Unknown catalog '{catalog}'. Use one of: {', '.join(CATALOGS)}")

        if not settings.image_api_key:
            logger.error("Seeding rejected: image API key not configured")
            raise ServiceNotConfiguredError("Image API key not configured on server")

        caretaker = await self.ensure_demo_caretaker()
        # A failed insert rolls back and expires the profile, so keep the plain id
        caretaker_id = caretaker.id
        client = ImageGenerationClient(settings.image_api_key, transport=self._transport)
        style = CATALOG_STYLES[catalog]

        logger.info(f"Starting {catalog} property seeding ({len(CATALOGS[catalog])} listings)")

        created_titles = []
        details = {}
        for entry in CATALOGS[catalog]:
            try:
                await self._seed_entry(entry, caretaker_id, client, style)
            except APIException as e:
                logger.error(f"Skipping {entry.title}: {e.detail}")
                details[entry.title] = e.detail
            except Exception as e:
                logger.error(f"Skipping {entry.title}: {e}")
                details[entry.title] = str(e)
            else:
                logger.info(f"Created demo listing: {entry.title}")
                created_titles.append(entry.title)

        message = f"Seeded {len(created_titles)} of {len(CATALOGS[catalog])} {catalog} properties"
        logger.info(message)
        return {
            "success": True,
            "message": message,
            "created": len(created_titles),
            "skipped": len(details),
            "created_titles": created_titles,
            "details": details,
        }

    async def _seed_entry(
        self,
        entry: CatalogEntry,
        caretaker_id: uuid.UUID,
        client: ImageGenerationClient,
        style: str
    ) -> None:
        logger.debug(f"Generating image for: {entry.title}")
        content_type, image_bytes = await client.generate(entry.image_prompt + style)

        object_path = f"seed/{uuid.uuid4()}.{FileValidator.extension_for(content_type)}"
        image_url = await self.storage.store_bytes(object_path, image_bytes, content_type)

        property_obj = await self.property_repo.create({
            **entry_to_property_data(entry),
            "caretaker_id": caretaker_id,
            "status": PropertyStatus.AVAILABLE.value,
        })

        await self.image_repo.add_many([{
            "property_id": property_obj.id,
            "image_url": image_url,
            "storage_path": object_path,
            "display_order": 0,
        }])
