#!/usr/bin/env python3
"""
Seed sample destinations and tour packages for local development.
Usage: python scripts/seed_destinations.py [database_url]
"""

import sys

from travel_admin.config import ProposalSettings
from travel_admin.database import Database
from travel_admin.models import Destination, TourPackage

SAMPLE_DESTINATIONS = [
    {
        "name": "Bali",
        "country": "Indonesia",
        "slug": "bali",
        "description": "Temples, rice terraces and beaches.",
        "hero_image": "https://images.unsplash.com/photo-1537996194471-e657df975ab4",
        "status": "published",
        "packages": [
            {
                "title": "Bali Escape",
                "slug": "bali-escape",
                "short_description": "Five relaxed days between Ubud and Seminyak.",
                "duration_days": 5,
                "duration_nights": 4,
                "price_from": 45000,
                "price_to": 60000,
                "currency": "INR",
                "inclusions": ["Airport transfers", "Daily breakfast", "Ubud day tour"],
                "exclusions": ["International flights", "Visa fees"],
                "highlights": ["Tegallalang rice terraces", "Uluwatu sunset"],
                "max_group_size": 12,
            },
        ],
    },
    {
        "name": "Kyoto",
        "country": "Japan",
        "slug": "kyoto",
        "description": "Shrines, gardens and old streets.",
        "hero_image": "https://images.unsplash.com/photo-1493976040374-85c8e12f0c0e",
        "status": "published",
        "packages": [
            {
                "title": "Kyoto Temples & Tea",
                "slug": "kyoto-temples-tea",
                "short_description": "A week of temples and tea ceremonies.",
                "duration_days": 7,
                "duration_nights": 6,
                "price_from": 1850,
                "currency": "USD",
                "inclusions": ["Hotel", "JR pass", "Tea ceremony"],
                "exclusions": ["Lunches"],
                "highlights": ["Fushimi Inari at dawn"],
            },
        ],
    },
    {"name": "Reykjavik", "country": "Iceland", "slug": "reykjavik", "status": "draft", "packages": []},
]


def seed(database: Database) -> int:
    db = database.session()
    created = 0
    try:
        for entry in SAMPLE_DESTINATIONS:
            entry = dict(entry)
            packages = entry.pop("packages")
            if db.query(Destination).filter(Destination.slug == entry["slug"]).first():
                continue
            destination = Destination(**entry)
            for pkg in packages:
                destination.packages.append(TourPackage(**pkg))
            db.add(destination)
            created += 1
        db.commit()
    finally:
        db.close()
    return created


def main():
    settings = ProposalSettings.from_env()
    url = sys.argv[1] if len(sys.argv) > 1 else settings.database_url
    database = Database(url)
    database.init_db()
    created = seed(database)
    print(f"Seeded {created} destination(s) into {url}")


if __name__ == "__main__":
    main()
