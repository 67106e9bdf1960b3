"""
Sample catalog loaded into a fresh storage backend
"""

import logging
from typing import Any, Dict, List, Tuple

from tuca.core.passwords import get_password_hash
from tuca.core.settings import settings
from tuca.db.models import TESTIMONIAL_TARGETS, CatalogKind

logger = logging.getLogger(__name__)


def admin_user_data() -> Dict[str, Any]:
    return {
        "email": settings.ADMIN_EMAIL,
        "password_hash": get_password_hash(settings.ADMIN_PASSWORD),
        "first_name": "Admin",
        "last_name": "User",
        "role": "admin",
    }


SAMPLE_EXPERIENCES: List[Dict[str, Any]] = [
    {
        "title": "Dolphin Bay Tour",
        "description": "Swim alongside spinner dolphins in their natural habitat at the famous Dolphin Bay, guided by marine biologists.",
        "price": 120,
        "duration": "3 hours",
        "image": "https://images.unsplash.com/photo-1597466599360-3b9775841aec?auto=format&fit=crop&w=1964&q=80",
        "featured": True,
        "rating": 4.9,
        "location": "Dolphin Bay, Fernando de Noronha",
        "tags": ["Wildlife", "Swimming", "Guided Tour"],
    },
    {
        "title": "Snorkeling Adventure",
        "description": "Explore the vibrant coral reefs and encounter unique marine species in the crystal-clear waters of Fernando de Noronha.",
        "price": 85,
        "duration": "4 hours",
        "image": "https://images.unsplash.com/photo-1544551763-46a013bb70d5?auto=format&fit=crop&w=2070&q=80",
        "featured": True,
        "rating": 4.8,
        "location": "Sueste Bay, Fernando de Noronha",
        "tags": ["Snorkeling", "Marine Life", "Beginner Friendly"],
    },
    {
        "title": "Luxury Sunset Sailing",
        "description": "Set sail on a private catamaran and witness the breathtaking Noronha sunset while enjoying champagne and gourmet appetizers.",
        "price": 195,
        "duration": "2.5 hours",
        "image": "https://images.unsplash.com/photo-1502680390469-be75c86b636f?auto=format&fit=crop&w=2070&q=80",
        "featured": True,
        "rating": 5.0,
        "location": "Port of Santo Antônio, Fernando de Noronha",
        "tags": ["Sunset", "Sailing", "Luxury", "Food & Drinks"],
    },
]

SAMPLE_ACCOMMODATIONS: List[Dict[str, Any]] = [
    {
        "title": "Oceanfront Villa Serenity",
        "description": "A luxurious 3-bedroom villa with panoramic ocean views, private infinity pool, and direct beach access.",
        "price": 750,
        "image": "https://images.unsplash.com/photo-1571896349842-33c89424de2d?auto=format&fit=crop&w=1480&q=80",
        "featured": True,
        "rating": 4.9,
        "location": "Praia do Sueste, Fernando de Noronha",
        "amenities": ["Private Pool", "Beach Access", "Air Conditioning", "Full Kitchen", "WiFi"],
        "bedrooms": 3,
        "capacity": 6,
    },
    {
        "title": "Eco-Luxury Bungalow",
        "description": "Sustainable luxury in a private bungalow surrounded by tropical vegetation, featuring solar power and rainwater harvesting.",
        "price": 390,
        "image": "https://images.unsplash.com/photo-1602002418082-dd4a3f5298d8?auto=format&fit=crop&w=1974&q=80",
        "featured": True,
        "rating": 4.8,
        "location": "Morro do Pico Area, Fernando de Noronha",
        "amenities": ["Eco-Friendly", "Outdoor Shower", "Garden View", "Breakfast Included"],
        "bedrooms": 1,
        "capacity": 2,
    },
]

SAMPLE_PACKAGES: List[Dict[str, Any]] = [
    {
        "title": "Adventure Explorer",
        "description": "Perfect for thrill-seekers, this package includes snorkeling, hiking to Pico hill, boat tour, and more.",
        "price": 1295,
        "image": "https://images.unsplash.com/photo-1586005660198-47ec6ff5a5ce?auto=format&fit=crop&w=2071&q=80",
        "featured": True,
        "duration": "5 days / 4 nights",
        "duration_days": 5,
        "location": "Fernando de Noronha",
        "inclusions": [
            "5 days / 4 nights luxury accommodation",
            "4 adventure activities",
            "Airport transfers included",
            "Daily breakfast and 2 special dinners",
        ],
        "tags": ["Adventure", "Active", "Nature"],
    },
    {
        "title": "Relaxation Retreat",
        "description": "Unwind with beach yoga, spa treatments, sunset sailing, and peaceful moments on the island's most secluded beaches.",
        "price": 1695,
        "image": "https://images.unsplash.com/photo-1544551763-92ab472cad5d?auto=format&fit=crop&w=2070&q=80",
        "featured": True,
        "duration": "6 days / 5 nights",
        "duration_days": 6,
        "location": "Fernando de Noronha",
        "inclusions": [
            "6 days / 5 nights eco-luxury accommodation",
            "3 spa treatments & daily yoga",
            "Private beach picnic & sunset sailing",
            "All meals with healthy, local cuisine",
        ],
        "tags": ["Relaxation", "Wellness", "Spa"],
    },
    {
        "title": "Family Discovery",
        "description": "Create unforgettable memories with activities suitable for all ages, including wildlife encounters and educational experiences.",
        "price": 4495,
        "image": "https://images.unsplash.com/photo-1540541338287-41700207dee6?auto=format&fit=crop&w=2070&q=80",
        "featured": True,
        "duration": "7 days / 6 nights",
        "duration_days": 7,
        "location": "Fernando de Noronha",
        "max_people": 6,
        "inclusions": [
            "7 days / 6 nights family villa",
            "Kid-friendly activities & nature tours",
            "Marine conservation workshop",
            "All meals & special family dinner",
        ],
        "tags": ["Family", "Educational", "Kid-friendly"],
    },
]

SAMPLE_VEHICLES: List[Dict[str, Any]] = [
    {
        "vehicle_type": "buggy",
        "title": "Island Explorer Buggy",
        "description": "Perfect for navigating the island's beaches and hills, this open-air buggy offers freedom and adventure.",
        "price_per_day": 85,
        "image": "https://images.unsplash.com/photo-1566775809090-f819c83325ba?auto=format&fit=crop&w=1974&q=80",
        "capacity": 4,
        "features": ["4x4 Capability", "Open Air", "Bluetooth Audio", "GPS Navigation"],
    },
    {
        "vehicle_type": "scooter",
        "title": "Eco Scooter",
        "description": "Environmentally friendly electric scooter for easy and fun transportation around the island.",
        "price_per_day": 45,
        "image": "https://images.unsplash.com/photo-1558980663-3685c1d673c4?auto=format&fit=crop&w=1970&q=80",
        "capacity": 2,
        "features": ["Electric", "Eco-friendly", "Helmet Included", "Easy to Park"],
    },
]

SAMPLE_RESTAURANTS: List[Dict[str, Any]] = [
    {
        "name": "Mirante do Noronha",
        "description": "Stunning seafood restaurant with panoramic views of the island and ocean, specializing in freshly caught local fish.",
        "cuisine": "Seafood",
        "price_range": "$$$",
        "image": "https://images.unsplash.com/photo-1516997121675-4c2d1684aa3e?auto=format&fit=crop&w=1974&q=80",
        "location": "Morro do Pico, Fernando de Noronha",
        "opening_hours": "12PM-10PM daily",
        "featured": True,
        "rating": 4.8,
    },
    {
        "name": "Eco Café",
        "description": "Organic café serving sustainable, locally-sourced breakfast and lunch options with excellent coffee.",
        "cuisine": "Vegetarian",
        "price_range": "$$",
        "image": "https://images.unsplash.com/photo-1521017432531-fbd92d768814?auto=format&fit=crop&w=2070&q=80",
        "location": "Vila dos Remédios, Fernando de Noronha",
        "opening_hours": "7AM-3PM daily",
        "featured": True,
        "rating": 4.7,
    },
]

# Targets are 1-based positions in the sample lists above.
# sample_testimonial resolves them and the author to real ids.
SAMPLE_TESTIMONIALS: List[Dict[str, Any]] = [
    {
        "content": "The Dolphin Bay Tour was the highlight of our trip! The guides were knowledgeable and passionate, making sure we had the perfect experience while respecting the marine life.",
        "rating": 5.0,
        "experience_id": 1,
        "approved": True,
    },
    {
        "content": "Staying at the Oceanfront Villa Serenity was a dream come true. The views were spectacular, and the staff went above and beyond to ensure our comfort. Worth every penny!",
        "rating": 5.0,
        "accommodation_id": 1,
        "approved": True,
    },
    {
        "content": "The luxury sunset sailing exceeded our expectations. The crew was professional, the catamaran was immaculate, and the sunset views with champagne were absolutely magical.",
        "rating": 5.0,
        "experience_id": 3,
        "approved": True,
    },
]

SAMPLE_CATALOG: List[Tuple[CatalogKind, List[Dict[str, Any]]]] = [
    (CatalogKind.EXPERIENCE, SAMPLE_EXPERIENCES),
    (CatalogKind.ACCOMMODATION, SAMPLE_ACCOMMODATIONS),
    (CatalogKind.PACKAGE, SAMPLE_PACKAGES),
    (CatalogKind.VEHICLE, SAMPLE_VEHICLES),
    (CatalogKind.RESTAURANT, SAMPLE_RESTAURANTS),
]


def sample_testimonial(row: Dict[str, Any], user_id: int, catalog_ids: Dict[CatalogKind, List[int]]) -> Dict[str, Any]:
    data = {**row, "user_id": user_id}
    for kind, column in TESTIMONIAL_TARGETS.items():
        if data.get(column) is not None:
            data[column] = catalog_ids[kind][data[column] - 1]
    return data


async def seed_storage(storage) -> Dict[str, int]:
    """Create the admin user and the sample catalog through the storage interface"""
    stats = {"users": 0, "catalog_items": 0, "testimonials": 0}

    admin = await storage.get_user_by_email(settings.ADMIN_EMAIL)
    if admin is None:
        admin = await storage.create_user(admin_user_data())
        stats["users"] += 1

    catalog_ids: Dict[CatalogKind, List[int]] = {}
    for kind, rows in SAMPLE_CATALOG:
        for row in rows:
            item = await storage.create_item(kind, dict(row))
            catalog_ids.setdefault(kind, []).append(item.id)
            stats["catalog_items"] += 1

    for row in SAMPLE_TESTIMONIALS:
        await storage.create_testimonial(sample_testimonial(row, admin.id, catalog_ids))
        stats["testimonials"] += 1

    logger.info(
        f"Seeded {stats['users']} users, {stats['catalog_items']} catalog items "
        f"and {stats['testimonials']} testimonials"
    )
    return stats
