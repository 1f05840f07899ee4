"""
Nyumba rental marketplace API.

Listings search, property posting, favorites, messaging, a movers
marketplace with bookings, and an LLM-backed housing assistant.
"""

__version__ = "1.0.0"
