"""
Demo listing catalogs used by the seeding endpoint.

Entries name a building kind ("apartment", "house" or "bedsitter") rather than
a unit layout; resolve_property_type maps the kind and room count onto the
listing types.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from nyumba.models.property import PropertyType

STANDARD = "standard"
AFFORDABLE = "affordable"

PHOTO_STYLE = ", professional real estate photography, high quality, well lit, attractive"
CATALOG_STYLES = {
    STANDARD: PHOTO_STYLE,
    AFFORDABLE: PHOTO_STYLE + ", photorealistic",
}


@dataclass(frozen=True)
class CatalogEntry:
    title: str
    description: str
    location: str
    neighborhood: str
    price: int
    deposit: int
    kind: str
    rooms: int
    is_furnished: bool
    utilities_included: bool
    amenities: Tuple[str, ...] = field(default_factory=tuple)
    image_prompt: str = ""


def resolve_property_type(kind: str, rooms: int) -> PropertyType:
    """Map a catalog building kind and room count onto a listing type."""
    if kind == "bedsitter":
        return PropertyType.BEDSITTER
    if kind == "studio":
        return PropertyType.STUDIO
    if rooms <= 1:
        return PropertyType.ONE_BEDROOM
    if rooms == 2:
        return PropertyType.TWO_BEDROOM
    return PropertyType.THREE_BEDROOM_PLUS


def entry_to_property_data(entry: CatalogEntry) -> dict:
    return {
        "title": entry.title,
        "description": entry.description,
        "location": entry.location,
        "neighborhood": entry.neighborhood,
        "price": entry.price,
        "deposit": entry.deposit,
        "property_type": resolve_property_type(entry.kind, entry.rooms),
        "rooms": entry.rooms,
        "is_furnished": entry.is_furnished,
        "utilities_included": entry.utilities_included,
        "amenities": list(entry.amenities),
    }


STANDARD_CATALOG: List[CatalogEntry] = [
    CatalogEntry(
        "Modern 2BR Apartment in Kilimani",
        "Spacious 2-bedroom apartment with modern amenities, located in the heart of Kilimani. Close to shopping centers and restaurants.",
        "Kilimani", "Kilimani", 45000, 90000, "apartment", 2, True, False,
        ("Parking", "WiFi", "Security", "Backup Generator"),
        "Modern apartment building exterior in Nairobi, Kenya with balconies and green landscaping",
    ),
    CatalogEntry(
        "Cozy Bedsitter in Westlands",
        "Affordable bedsitter perfect for young professionals. Walking distance to Westlands amenities.",
        "Westlands", "Westlands", 18000, 36000, "bedsitter", 1, False, True,
        ("WiFi", "Security"),
        "Cozy studio apartment in Nairobi with modern minimalist design",
    ),
    CatalogEntry(
        "Spacious 3BR House in Karen",
        "Beautiful standalone house with a garden, perfect for families. Secure and serene environment.",
        "Karen", "Karen", 120000, 240000, "house", 3, True, False,
        ("Garden", "Parking", "DSQ", "Security", "Backup Generator"),
        "Luxury house with garden in Karen, Nairobi with modern architecture",
    ),
    CatalogEntry(
        "1BR Apartment in Parklands",
        "Well-maintained 1-bedroom apartment in a secure complex with excellent transport links.",
        "Parklands", "Parklands", 32000, 64000, "apartment", 1, False, False,
        ("Parking", "Security", "Gym"),
        "Modern apartment complex in Nairobi with gated security",
    ),
    CatalogEntry(
        "Executive 2BR in Lavington",
        "Premium 2-bedroom apartment with stunning city views and top-tier finishes.",
        "Lavington", "Lavington", 85000, 170000, "apartment", 2, True, True,
        ("Swimming Pool", "Gym", "Parking", "WiFi", "Security"),
        "Luxury high-rise apartment building in Nairobi with glass facade",
    ),
    CatalogEntry(
        "Affordable Bedsitter in Ngong Road",
        "Budget-friendly bedsitter close to the CBD with easy access to public transport.",
        "Ngong Road", "Ngong Road", 15000, 30000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Simple affordable apartment building in Nairobi",
    ),
    CatalogEntry(
        "4BR Villa in Runda",
        "Luxurious 4-bedroom villa with swimming pool and beautiful landscaping in an exclusive estate.",
        "Runda", "Runda Estate", 250000, 500000, "house", 4, True, False,
        ("Swimming Pool", "Garden", "DSQ", "Parking", "Security", "Gym"),
        "Luxury villa with swimming pool in Runda, Nairobi with lush gardens",
    ),
    CatalogEntry(
        "2BR Apartment in South B",
        "Well-located 2-bedroom apartment near shopping centers and schools.",
        "South B", "South B", 38000, 76000, "apartment", 2, False, False,
        ("Parking", "Security", "Playground"),
        "Family-friendly apartment building in Nairobi with children's playground",
    ),
    CatalogEntry(
        "Studio Apartment in Kilimani",
        "Compact studio with efficient layout, perfect for singles. Great neighborhood.",
        "Kilimani", "Kilimani", 25000, 50000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Parking"),
        "Modern studio apartment interior in Nairobi with efficient space design",
    ),
    CatalogEntry(
        "3BR Townhouse in Syokimau",
        "Modern townhouse with DSQ, perfect for families. Close to SGR station.",
        "Syokimau", "Syokimau", 65000, 130000, "house", 3, False, False,
        ("DSQ", "Parking", "Garden", "Security"),
        "Modern townhouse complex in Syokimau, Nairobi with contemporary design",
    ),
    CatalogEntry(
        "1BR in Kileleshwa",
        "Charming 1-bedroom apartment in quiet neighborhood with easy CBD access.",
        "Kileleshwa", "Kileleshwa", 40000, 80000, "apartment", 1, False, False,
        ("Parking", "Security", "Backup Generator"),
        "Peaceful residential apartment in Nairobi with green surroundings",
    ),
    CatalogEntry(
        "2BR Penthouse in Upper Hill",
        "Stunning penthouse with panoramic city views and premium finishes.",
        "Upper Hill", "Upper Hill", 150000, 300000, "apartment", 2, True, True,
        ("Swimming Pool", "Gym", "Parking", "WiFi", "Security", "Rooftop Terrace"),
        "Modern penthouse view from rooftop terrace overlooking Nairobi skyline",
    ),
    CatalogEntry(
        "Bedsitter in Embakasi",
        "Affordable bedsitter near the airport, ideal for aviation workers.",
        "Embakasi", "Embakasi", 12000, 24000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Budget apartment building near Nairobi airport",
    ),
    CatalogEntry(
        "3BR Apartment in Riverside",
        "Elegant 3-bedroom apartment in serene Riverside with excellent amenities.",
        "Riverside", "Riverside Drive", 95000, 190000, "apartment", 3, True, False,
        ("Swimming Pool", "Gym", "Parking", "Security", "WiFi"),
        "Elegant apartment building along Riverside Drive Nairobi with modern design",
    ),
    CatalogEntry(
        "2BR House in Kahawa West",
        "Affordable standalone house with garden, perfect for small families.",
        "Kahawa West", "Kahawa West", 35000, 70000, "house", 2, False, False,
        ("Garden", "Parking", "Security"),
        "Simple family house with garden in Kahawa West, Nairobi",
    ),
    CatalogEntry(
        "1BR Apartment in Langata",
        "Cozy apartment near Nairobi National Park with nature views.",
        "Langata", "Langata", 30000, 60000, "apartment", 1, False, False,
        ("Parking", "Security", "Garden"),
        "Apartment building near Nairobi National Park with nature surroundings",
    ),
    CatalogEntry(
        "4BR House in Muthaiga",
        "Prestigious 4-bedroom house in Muthaiga with excellent security and amenities.",
        "Muthaiga", "Muthaiga", 280000, 560000, "house", 4, True, False,
        ("Swimming Pool", "Garden", "DSQ", "Parking", "Security", "Gym"),
        "Prestigious luxury home in Muthaiga, Nairobi with colonial architecture",
    ),
    CatalogEntry(
        "2BR Apartment in Donholm",
        "Affordable 2-bedroom apartment in established neighborhood with good amenities.",
        "Donholm", "Donholm", 28000, 56000, "apartment", 2, False, False,
        ("Parking", "Security"),
        "Established apartment complex in Donholm, Nairobi",
    ),
    CatalogEntry(
        "Bedsitter in Kasarani",
        "Budget-friendly bedsitter near Thika Road with easy transport access.",
        "Kasarani", "Kasarani", 13000, 26000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Budget-friendly apartment in Kasarani, Nairobi near Thika Road",
    ),
    CatalogEntry(
        "3BR Apartment in Westlands",
        "Prime 3-bedroom apartment in Westlands with modern finishes and great location.",
        "Westlands", "Westlands", 110000, 220000, "apartment", 3, True, True,
        ("Swimming Pool", "Gym", "Parking", "WiFi", "Security", "Backup Generator"),
        "Premium apartment building in Westlands, Nairobi with modern glass design",
    ),
]

AFFORDABLE_CATALOG: List[CatalogEntry] = [
    CatalogEntry(
        "Cozy Bedsitter in Kilimani",
        "Modern bedsitter with all amenities. Perfect for young professionals. Close to shopping centers and excellent transport links.",
        "Kilimani", "Kilimani", 18000, 36000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Water"),
        "Modern cozy bedsitter apartment interior in Nairobi with bed, kitchenette, and living area in one room",
    ),
    CatalogEntry(
        "Affordable 1BR in Ngong Road",
        "Spacious one-bedroom apartment in a secure building. Great neighborhood with easy access to town.",
        "Ngong Road", "Ngong Road", 25000, 50000, "apartment", 1, False, False,
        ("Parking", "Security", "Backup Water"),
        "Clean one bedroom apartment in Nairobi with separate living room and bedroom",
    ),
    CatalogEntry(
        "Studio Bedsitter in Westlands",
        "Fully furnished bedsitter in the heart of Westlands. Walking distance to all major amenities.",
        "Westlands", "Westlands", 22000, 44000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Gym Access"),
        "Stylish studio apartment in Westlands Nairobi with modern furniture and kitchenette",
    ),
    CatalogEntry(
        "1BR Apartment in Parklands",
        "Well-maintained apartment with separate bedroom. Secure complex with good transport links.",
        "Parklands", "Parklands", 28000, 56000, "apartment", 1, False, False,
        ("Parking", "Security", "Gym"),
        "Modern one bedroom apartment in Parklands Nairobi with balcony view",
    ),
    CatalogEntry(
        "Bedsitter in South B",
        "Affordable bedsitter near shopping centers. Perfect for students and young professionals.",
        "South B", "South B", 15000, 30000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Simple affordable bedsitter in Nairobi with basic amenities",
    ),
    CatalogEntry(
        "1BR in Kileleshwa",
        "Charming one-bedroom apartment in quiet neighborhood. Perfect for singles or couples.",
        "Kileleshwa", "Kileleshwa", 35000, 70000, "apartment", 1, False, False,
        ("Parking", "Security", "Backup Generator"),
        "Comfortable one bedroom apartment in Kileleshwa Nairobi with modern kitchen",
    ),
    CatalogEntry(
        "Studio in Lavington",
        "Premium studio apartment with excellent finishes. Serene and secure environment.",
        "Lavington", "Lavington", 40000, 80000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Gym", "Swimming Pool"),
        "Luxury studio apartment in Lavington Nairobi with premium finishes",
    ),
    CatalogEntry(
        "Bedsitter in Kasarani",
        "Budget-friendly bedsitter near Thika Road. Easy access to town via superhighway.",
        "Kasarani", "Kasarani", 12000, 24000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Budget bedsitter apartment in Kasarani Nairobi near Thika Road",
    ),
    CatalogEntry(
        "1BR Apartment in Embakasi",
        "One-bedroom apartment near the airport. Ideal for aviation workers and travelers.",
        "Embakasi", "Embakasi", 20000, 40000, "apartment", 1, False, False,
        ("Parking", "Security"),
        "One bedroom apartment near Nairobi airport in Embakasi",
    ),
    CatalogEntry(
        "Studio in Upper Hill",
        "Modern studio near major hospitals and offices. Great for medical professionals.",
        "Upper Hill", "Upper Hill", 32000, 64000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Parking"),
        "Modern studio apartment in Upper Hill Nairobi near hospitals",
    ),
    CatalogEntry(
        "Bedsitter in Donholm",
        "Quiet bedsitter in established neighborhood. Good security and water supply.",
        "Donholm", "Donholm", 16000, 32000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Peaceful bedsitter in Donholm Nairobi residential area",
    ),
    CatalogEntry(
        "1BR in Langata",
        "Spacious one-bedroom near Nairobi National Park. Enjoy nature views daily.",
        "Langata", "Langata", 30000, 60000, "apartment", 1, False, False,
        ("Parking", "Security", "Garden"),
        "One bedroom apartment in Langata Nairobi with nature views",
    ),
    CatalogEntry(
        "Bedsitter in Kahawa West",
        "Affordable bedsitter with reliable water and power. Close to Thika Road.",
        "Kahawa West", "Kahawa West", 13000, 26000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Simple bedsitter in Kahawa West Nairobi near Thika Road",
    ),
    CatalogEntry(
        "1BR Apartment in Kilimani",
        "Well-located one-bedroom in vibrant Kilimani. Walking distance to restaurants and shops.",
        "Kilimani", "Kilimani", 38000, 76000, "apartment", 1, True, False,
        ("WiFi", "Security", "Parking", "Gym"),
        "Furnished one bedroom apartment in Kilimani Nairobi with modern amenities",
    ),
    CatalogEntry(
        "Studio in Riverside",
        "Elegant studio apartment along Riverside Drive. Premium location and finishes.",
        "Riverside", "Riverside Drive", 45000, 90000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Gym", "Swimming Pool"),
        "Luxury studio on Riverside Drive Nairobi with river views",
    ),
    CatalogEntry(
        "Bedsitter in Rongai",
        "Budget-friendly bedsitter in Rongai. Perfect for students at nearby universities.",
        "Rongai", "Rongai", 10000, 20000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Affordable bedsitter for students in Rongai near universities",
    ),
    CatalogEntry(
        "1BR in Westlands",
        "Modern one-bedroom in prime Westlands location. Great for professionals.",
        "Westlands", "Westlands", 42000, 84000, "apartment", 1, True, True,
        ("WiFi", "Security", "Parking", "Backup Generator"),
        "Modern furnished one bedroom in Westlands Nairobi business district",
    ),
    CatalogEntry(
        "Bedsitter in Ruaka",
        "Spacious bedsitter in growing Ruaka town. Affordable with good amenities.",
        "Ruaka", "Ruaka", 14000, 28000, "bedsitter", 1, False, True,
        ("Security", "Water", "Parking"),
        "Bedsitter apartment in Ruaka town Nairobi",
    ),
    CatalogEntry(
        "1BR Apartment in South C",
        "Quiet one-bedroom in established South C. Family-friendly neighborhood.",
        "South C", "South C", 33000, 66000, "apartment", 1, False, False,
        ("Parking", "Security", "Playground"),
        "One bedroom apartment in South C Nairobi residential area",
    ),
    CatalogEntry(
        "Studio in Kilimani",
        "Compact studio with efficient design. All utilities included in rent.",
        "Kilimani", "Kilimani", 26000, 52000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Parking"),
        "Compact efficient studio apartment in Kilimani Nairobi",
    ),
    CatalogEntry(
        "Bedsitter in Githurai",
        "Affordable bedsitter along Thika Road. Good transport and shopping nearby.",
        "Githurai", "Githurai", 11000, 22000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Budget bedsitter in Githurai along Thika Road Nairobi",
    ),
    CatalogEntry(
        "1BR in Parklands",
        "Spacious one-bedroom with balcony. Diverse and vibrant neighborhood.",
        "Parklands", "Parklands", 31000, 62000, "apartment", 1, False, False,
        ("Parking", "Security", "Balcony"),
        "One bedroom with balcony in Parklands Nairobi",
    ),
    CatalogEntry(
        "Bedsitter in Imara Daima",
        "Convenient bedsitter near SGR terminus. Easy access to town and airport.",
        "Imara Daima", "Imara Daima", 15000, 30000, "bedsitter", 1, False, True,
        ("Security", "Water"),
        "Bedsitter near SGR station in Imara Daima Nairobi",
    ),
    CatalogEntry(
        "1BR Apartment in Kileleshwa",
        "Modern one-bedroom in leafy Kileleshwa. Quiet and secure environment.",
        "Kileleshwa", "Kileleshwa", 37000, 74000, "apartment", 1, False, False,
        ("Parking", "Security", "Garden"),
        "Modern one bedroom in leafy Kileleshwa Nairobi",
    ),
    CatalogEntry(
        "Studio in Ngong Road",
        "Furnished studio on Ngong Road. Perfect location for young professionals.",
        "Ngong Road", "Ngong Road", 24000, 48000, "bedsitter", 1, True, True,
        ("WiFi", "Security", "Parking"),
        "Furnished studio on Ngong Road Nairobi for young professionals",
    ),
]

CATALOGS: Dict[str, List[CatalogEntry]] = {
    STANDARD: STANDARD_CATALOG,
    AFFORDABLE: AFFORDABLE_CATALOG,
}
