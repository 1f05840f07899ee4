"""
Listing presentation helpers: type labels, amenity parsing, price formatting
and the fallback image selector.
"""

import hashlib
import re
from decimal import Decimal
from typing import Iterable, List, Optional, Union

# Stock photos shown for listings that have no uploaded images
PLACEHOLDER_IMAGES = [
    "https://images.unsplash.com/photo-1502672260266-1c1ef2d93688?w=800",
    "https://images.unsplash.com/photo-1522708323590-d24dbb6b0267?w=800",
    "https://images.unsplash.com/photo-1560448204-e02f11c3d0e2?w=800",
    "https://images.unsplash.com/photo-1493809842364-78817add7ffb?w=800",
    "https://images.unsplash.com/photo-1484154218962-a197022b5858?w=800",
    "https://images.unsplash.com/photo-1505691938895-1758d7feb511?w=800",
]


def format_property_type(property_type: str) -> str:
    """
    Turn an enum value into a display label.

    >>> format_property_type("three_bedroom_plus")
    'Three Bedroom Plus'
    """
    spaced = property_type.replace("_", " ")
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), spaced)


def parse_amenities(value: Union[str, Iterable[str], None]) -> List[str]:
    """Accept "WiFi, Parking" or a list; trim entries and drop blanks."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


def fallback_image_url(key: str) -> str:
    """Pick a placeholder deterministically from a stable key."""
    digest = hashlib.md5(key.encode("utf-8")).hexdigest()
    return PLACEHOLDER_IMAGES[int(digest, 16) % len(PLACEHOLDER_IMAGES)]


def select_display_image(property_obj) -> str:
    """First image by display order, else the property's fallback placeholder."""
    images = sorted(property_obj.images or [], key=lambda image: image.display_order)
    if images:
        return images[0].image_url
    return fallback_image_url(str(property_obj.id))


def format_price(amount: Optional[Union[Decimal, float, int]]) -> str:
    """Render a KSh amount without trailing decimals for whole numbers."""
    if amount is None:
        return "0"
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return str(int(value))
    return f"{value:.2f}"