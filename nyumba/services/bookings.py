"""
Booking service: tenants book movers, movers answer requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from nyumba.models.booking import DEFAULT_VAN_SIZE, MoveRequest, MoveRequestStatus
from nyumba.models.mover import Mover
from nyumba.models.user import Profile
from nyumba.repositories.booking import MoveRequestRepository
from nyumba.repositories.mover import MoverRepository
from nyumba.repositories.property import PropertyRepository
from nyumba.schemas.booking import MoveRequestCreate
from nyumba.utils.exceptions import (
    BadRequestError,
    ForbiddenError,
    MoveRequestNotFoundError,
    MoverNotFoundError,
    PropertyNotFoundError,
    UnauthorizedError,
    ValidationError
)

logger = logging.getLogger(__name__)

SIGN_IN_REQUIRED = "Please sign in to book a mover"
MISSING_FIELDS = "Please fill in all required fields"

MOVER_TRANSITIONS = {
    MoveRequestStatus.ACCEPTED,
    MoveRequestStatus.DECLINED,
    MoveRequestStatus.COMPLETED,
}
TENANT_TRANSITIONS = {MoveRequestStatus.CANCELLED}


def estimate_from_mover(mover: Mover) -> Tuple[Decimal, str]:
    """
    Quote taken from the mover's first listed service: its fixed rate,
    else its hourly rate, else zero. Van size falls back to a pickup.
    """
    service = mover.primary_service
    if service is None:
        return Decimal("0"), DEFAULT_VAN_SIZE

    if service.fixed_rate is not None:
        cost = service.fixed_rate
    elif service.hourly_rate is not None:
        cost = service.hourly_rate
    else:
        cost = Decimal("0")
    return Decimal(cost), service.van_size or DEFAULT_VAN_SIZE


class BookingService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.request_repo = MoveRequestRepository(db_session)
        self.mover_repo = MoverRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def book_mover(self, tenant: Optional[Profile], data: MoveRequestCreate) -> MoveRequest:
        """
        Create a pending move request.

        Raises:
            UnauthorizedError: If nobody is signed in
            BadRequestError: If the date or either location is missing, or the date is past
            MoverNotFoundError: If the mover doesn't exist
        """
        if tenant is None:
            raise UnauthorizedError(SIGN_IN_REQUIRED)

        pickup = (data.pickup_location or "").strip()
        dropoff = (data.dropoff_location or "").strip()
        if data.move_date is None or not pickup or not dropoff:
            raise BadRequestError(MISSING_FIELDS)

        if data.move_date < date.today():
            raise BadRequestError("Move date cannot be in the past")

        mover = await self.mover_repo.get_by_id(data.mover_id)
        if not mover:
            raise MoverNotFoundError(str(data.mover_id))

        if data.property_id is not None and not await self.property_repo.exists(data.property_id):
            raise PropertyNotFoundError(str(data.property_id))

        estimated_cost, van_size = estimate_from_mover(mover)

        move_request = await self.request_repo.create({
            "tenant_id": tenant.id,
            "mover_id": mover.id,
            "property_id": data.property_id,
            "move_date": data.move_date,
            "pickup_location": pickup,
            "dropoff_location": dropoff,
            "notes": data.notes,
            "packing_help": data.packing_help,
            "van_size": van_size,
            "estimated_cost": estimated_cost,
            "status": MoveRequestStatus.PENDING.value,
        })

        logger.info(
            f"Move request {move_request.id} created by {tenant.email} for mover {mover.id} "
            f"on {data.move_date} (KSh {estimated_cost})"
        )
        return move_request

    async def my_bookings(self, tenant: Profile) -> List[MoveRequest]:
        return await self.request_repo.get_for_tenant(tenant.id)

    async def mover_requests(self, current_user: Profile) -> List[MoveRequest]:
        """Requests addressed to the current user's moving business."""
        mover = await self.mover_repo.get_by_user_id(current_user.id)
        if not mover:
            raise MoverNotFoundError(f"user {current_user.id}")
        return await self.request_repo.get_for_mover(mover.id)

    async def update_booking_status(
        self,
        request_id: uuid.UUID,
        status: MoveRequestStatus,
        current_user: Profile
    ) -> MoveRequest:
        """
        The mover accepts, declines or completes a request; the tenant may cancel it.
        Completing a move counts towards the mover's total jobs and is final.
        """
        move_request = await self.request_repo.get_by_id(request_id)
        if not move_request:
            raise MoveRequestNotFoundError(str(request_id))

        is_mover = move_request.mover is not None and move_request.mover.user_id == current_user.id
        is_tenant = move_request.tenant_id == current_user.id

        if not is_mover and not is_tenant:
            raise ForbiddenError("You cannot change this booking")

        allowed = set()
        if is_mover:
            allowed |= MOVER_TRANSITIONS
        if is_tenant:
            allowed |= TENANT_TRANSITIONS

        if status not in allowed:
            raise ValidationError(f"Status cannot be set to '{status.value}' by this user")

        if move_request.status == status.value:
            return move_request

        # Completion is final so each move counts once towards total_jobs
        if move_request.status == MoveRequestStatus.COMPLETED.value:
            raise ValidationError("A completed move cannot be changed")

        updated = await self.request_repo.update(move_request.id, {"status": status.value})

        if status == MoveRequestStatus.COMPLETED:
            await self.mover_repo.increment_total_jobs(move_request.mover_id)

        logger.info(f"Move request {request_id} marked {status.value} by {current_user.email}")
        return updated
