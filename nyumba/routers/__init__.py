"""
API routers for the Nyumba rental marketplace.
"""

from . import admin, ai, auth, bookings, favorites, images, messages, movers, properties

__all__ = [
    "admin",
    "ai",
    "auth",
    "bookings",
    "favorites",
    "images",
    "messages",
    "movers",
    "properties",
]
