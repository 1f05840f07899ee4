"""
Database models for the Nyumba rental marketplace.
"""

from nyumba.models.user import Profile, UserRole, AppRole, UserRoleGrant
from nyumba.models.property import Property, PropertyType, PropertyStatus
from nyumba.models.image import PropertyImage
from nyumba.models.saved import SavedProperty
from nyumba.models.message import Message
from nyumba.models.booking import MoveRequest, MoveRequestStatus
from nyumba.models.mover import Mover, MoverService, MoverReview, VerificationStatus

__all__ = [
    "Profile",
    "UserRole",
    "AppRole",
    "UserRoleGrant",
    "Property",
    "PropertyType",
    "PropertyStatus",
    "PropertyImage",
    "SavedProperty",
    "Message",
    "MoveRequest",
    "MoveRequestStatus",
    "Mover",
    "MoverService",
    "MoverReview",
    "VerificationStatus",
]
