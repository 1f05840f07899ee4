"""
Service layer for business logic implementation.
"""

from .error_handler import ErrorHandlerService
from .auth import AuthService
from .image import ImageService
from .property import PropertyService
from .favorites import FavoritesService
from .notifier import MessageNotifier, notifier
from .messaging import MessagingService, group_conversations
from .movers import MoversService, NAIROBI_AREAS, average_rating
from .bookings import BookingService
from .assistant import AssistantService
from .seeding import SeedingService

__all__ = [
    "ErrorHandlerService",
    "AuthService",
    "ImageService",
    "PropertyService",
    "FavoritesService",
    "MessageNotifier",
    "notifier",
    "MessagingService",
    "group_conversations",
    "MoversService",
    "NAIROBI_AREAS",
    "average_rating",
    "BookingService",
    "AssistantService",
    "SeedingService",
]
