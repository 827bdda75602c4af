#!/usr/bin/env python3
"""Create the schema and load a starter catalog into an empty database."""

import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from treksite.core.database import close_db, init_db  # noqa: E402
from treksite.core.dependencies import query_cache, table_client  # noqa: E402
from treksite.services.catalog import ItineraryService, TrekService  # noqa: E402
from treksite.services.content import FaqService, TeamMemberService  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TREKS = [
    {
        "slug": "everest-base-camp",
        "name": "Everest Base Camp Trek",
        "region": "Everest",
        "duration": "14 Days",
        "max_altitude": "5,364m",
        "difficulty": "Challenging",
        "best_seasons": ["March-May", "September-November"],
        "price": 1450,
        "short_description": "Journey to the foot of the world's highest peak through legendary Sherpa villages.",
        "description": (
            "The Everest Base Camp trek takes you through the heart of the Khumbu region to the "
            "base of Mount Everest, past Sherpa villages, monasteries and glaciers."
        ),
        "highlights": ["Stand at Everest Base Camp (5,364m)", "Summit Kala Patthar for sunrise views"],
        "includes": ["Airport transfers", "Domestic flights", "All permits and fees"],
        "excludes": ["International flights", "Travel insurance"],
        "is_featured": True,
        "rating": 4.9,
        "review_count": 342,
        "itinerary": [
            {"day_number": 1, "title": "Arrival in Kathmandu", "altitude": "1,400m"},
            {"day_number": 2, "title": "Fly to Lukla, Trek to Phakding", "altitude": "2,610m", "distance": "8km"},
            {"day_number": 3, "title": "Phakding to Namche Bazaar", "altitude": "3,440m", "distance": "11km"},
        ],
    },
    {
        "slug": "annapurna-circuit",
        "name": "Annapurna Circuit Trek",
        "region": "Annapurna",
        "duration": "12-18 Days",
        "max_altitude": "5,416m",
        "difficulty": "Challenging",
        "best_seasons": ["March-May", "October-November"],
        "price": 1250,
        "short_description": "The classic Himalayan trek crossing the mighty Thorong La Pass.",
        "is_featured": True,
        "rating": 4.8,
        "review_count": 287,
        "itinerary": [],
    },
    {
        "slug": "langtang-valley",
        "name": "Langtang Valley Trek",
        "region": "Langtang",
        "duration": "7-10 Days",
        "max_altitude": "4,984m",
        "difficulty": "Moderate",
        "price": 850,
        "short_description": "Discover the beautiful valley of glaciers closest to Kathmandu.",
        "is_featured": True,
        "rating": 4.7,
        "review_count": 156,
        "itinerary": [],
    },
    {
        "slug": "mardi-himal",
        "name": "Mardi Himal Trek",
        "region": "Annapurna",
        "duration": "5-7 Days",
        "max_altitude": "4,500m",
        "difficulty": "Moderate",
        "price": 650,
        "short_description": "A hidden gem offering pristine trails and stunning Annapurna views.",
        "rating": 4.8,
        "review_count": 89,
        "itinerary": [],
    },
]

FAQS = [
    {"category": "Booking", "question": "How do I book a trek?", "answer": "Use the booking form on any trek page.", "display_order": 1},
    {"category": "Booking", "question": "Is a deposit required?", "answer": "We confirm availability first, then request a deposit.", "display_order": 2},
    {"category": "Health", "question": "How do you handle altitude sickness?", "answer": "Itineraries include acclimatization days.", "display_order": 1},
]

TEAM = [
    {"name": "Pemba Sherpa", "role": "Lead Guide", "display_order": 1},
    {"name": "Maya Gurung", "role": "Operations Manager", "display_order": 2},
]

SETTINGS = {
    "phone_numbers": ["+977-1-4000000"],
    "email_addresses": ["info@nepaltreks.com"],
    "office_address": "Thamel, Kathmandu, Nepal",
    "default_meta_title": "Nepal Treks - Himalayan Trekking Adventures",
    "default_keywords": ["nepal trekking", "everest base camp", "annapurna circuit"],
}


async def seed() -> None:
    await init_db()

    treks = TrekService(table_client, query_cache)
    existing = await treks.fetch()
    if existing.error:
        raise RuntimeError(existing.error)
    if existing.data:
        logger.info("Catalog already has %d treks; nothing to seed", len(existing.data))
        return

    for entry in TREKS:
        values = {k: v for k, v in entry.items() if k != "itinerary"}
        created = await treks.create({**values, "is_published": True})
        if created.error:
            raise RuntimeError(created.error)

        itinerary = ItineraryService(table_client, query_cache, created.data.id)
        for day in entry["itinerary"]:
            await itinerary.create(day)
        logger.info("Seeded trek %s", entry["slug"])

    faqs = FaqService(table_client, query_cache)
    for faq in FAQS:
        await faqs.create(faq)

    team = TeamMemberService(table_client, query_cache)
    for member in TEAM:
        await team.create(member)

    await table_client.insert("settings", SETTINGS)
    logger.info("Seed data created")


async def main() -> None:
    try:
        await seed()
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
