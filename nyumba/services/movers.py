"""
Movers marketplace service: directory, registration, services, reviews and vetting.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from nyumba.models.mover import Mover, MoverReview, MoverService, VerificationStatus
from nyumba.models.user import Profile, UserRole
from nyumba.repositories.mover import MoverRepository, MoverReviewRepository, MoverServiceRepository
from nyumba.repositories.user import UserRepository
from nyumba.schemas.mover import MoverCreate, MoverReviewCreate, MoverServiceCreate
from nyumba.utils.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    MoverNotFoundError
)

logger = logging.getLogger(__name__)

# Service-area chips offered when registering and filtering movers
NAIROBI_AREAS = [
    "Westlands",
    "Kilimani",
    "Karen",
    "Kileleshwa",
    "South B",
    "South C",
    "Embakasi",
    "Kasarani",
    "Kahawa",
    "Ruaka",
    "Ngong Road",
    "Kibera",
]


def average_rating(ratings: Iterable[int], stored_rating: Union[Decimal, float, None]) -> float:
    """Mean of the review ratings, or the stored rating when there are none."""
    ratings = list(ratings)
    if ratings:
        return round(sum(ratings) / len(ratings), 2)
    return float(stored_rating or 0)


def serialize_mover(mover: Mover, include_reviews: bool = False) -> dict:
    data = mover.to_dict(include_reviews=include_reviews)
    data["average_rating"] = average_rating((review.rating for review in mover.reviews), mover.rating)
    return data


class MoversService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.mover_repo = MoverRepository(db_session)
        self.service_repo = MoverServiceRepository(db_session)
        self.review_repo = MoverReviewRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def list_movers(self, area: Optional[str] = None) -> List[Mover]:
        """Verified movers, optionally only those serving an area."""
        movers = await self.mover_repo.get_verified()
        area = (area or "").strip()
        if area and area.lower() != "all":
            movers = [mover for mover in movers if area in (mover.service_areas or [])]
        logger.debug(f"Mover directory returned {len(movers)} movers (area={area or 'any'})")
        return movers

    async def get_mover(self, mover_id: uuid.UUID) -> Mover:
        mover = await self.mover_repo.get_by_id(mover_id)
        if not mover:
            raise MoverNotFoundError(str(mover_id))
        return mover

    async def get_own_mover(self, current_user: Profile) -> Mover:
        mover = await self.mover_repo.get_by_user_id(current_user.id)
        if not mover:
            raise MoverNotFoundError(f"user {current_user.id}")
        return mover

    async def register_mover(self, data: MoverCreate, current_user: Profile) -> Mover:
        """
        Create the user's moving business. It starts unverified and the
        user's marketplace role becomes mover.
        """
        if await self.mover_repo.get_by_user_id(current_user.id):
            raise ConflictError("You already have a mover profile")

        unknown_areas = [area for area in data.service_areas if area not in NAIROBI_AREAS]
        if unknown_areas:
            logger.debug(f"Mover registered with custom service areas: {unknown_areas}")

        mover = await self.mover_repo.create({
            **data.model_dump(),
            "user_id": current_user.id,
            "verification_status": VerificationStatus.PENDING.value,
        })

        if current_user.user_role not in (UserRole.ADMIN, UserRole.MOVER):
            await self.user_repo.update(current_user.id, {"user_role": UserRole.MOVER})

        logger.info(f"Mover registered by {current_user.email}: {mover.business_name} (ID: {mover.id})")
        return mover

    async def add_service(self, mover_id: uuid.UUID, data: MoverServiceCreate, current_user: Profile) -> MoverService:
        mover = await self.get_mover(mover_id)
        if mover.user_id != current_user.id:
            raise ForbiddenError("Only the mover can add services")

        service = await self.service_repo.create({**data.model_dump(), "mover_id": mover.id})
        logger.info(f"Service {service.van_size} added to mover {mover.id}")
        return service

    async def add_review(self, mover_id: uuid.UUID, data: MoverReviewCreate, current_user: Profile) -> MoverReview:
        mover = await self.get_mover(mover_id)
        if mover.user_id == current_user.id:
            raise BadRequestError("You cannot review your own business")

        review = await self.review_repo.create({
            **data.model_dump(),
            "mover_id": mover.id,
            "reviewer_id": current_user.id,
        })
        logger.info(f"Review ({review.rating} stars) added to mover {mover.id} by {current_user.id}")
        return review

    async def verify_mover(self, mover_id: uuid.UUID, status: VerificationStatus, current_user: Profile) -> Mover:
        """Admin vetting of a mover."""
        mover = await self.get_mover(mover_id)
        updated = await self.mover_repo.update(mover.id, {"verification_status": status.value})
        logger.info(f"Mover {mover_id} marked {status.value} by {current_user.email}")
        return updated
