"""
Repository layer for data access operations.
"""

from nyumba.repositories.base import BaseRepository
from nyumba.repositories.user import UserRepository
from nyumba.repositories.property import PropertyRepository, build_listing_conditions
from nyumba.repositories.image import ImageRepository
from nyumba.repositories.saved import SavedPropertyRepository
from nyumba.repositories.message import MessageRepository
from nyumba.repositories.mover import MoverRepository, MoverServiceRepository, MoverReviewRepository
from nyumba.repositories.booking import MoveRequestRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PropertyRepository",
    "build_listing_conditions",
    "ImageRepository",
    "SavedPropertyRepository",
    "MessageRepository",
    "MoverRepository",
    "MoverServiceRepository",
    "MoverReviewRepository",
    "MoveRequestRepository",
]
