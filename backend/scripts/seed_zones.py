#!/usr/bin/env python3
"""Seed demo herb-growing zones into the registry."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from herbtrace.dependencies import get_services
from herbtrace.services import to_microdegrees

# Approximate boxes around well-known medicinal herb collection regions (degrees)
ZONES = [
    {
        "name": "Uttarakhand Himalaya",
        "min_lat": 29.0,
        "max_lat": 31.5,
        "min_lon": 77.5,
        "max_lon": 81.0,
    },
    {
        "name": "Western Ghats - Kerala",
        "min_lat": 8.2,
        "max_lat": 12.8,
        "min_lon": 74.8,
        "max_lon": 77.4,
    },
    {
        "name": "Nilgiri Hills",
        "min_lat": 11.1,
        "max_lat": 11.6,
        "min_lon": 76.4,
        "max_lon": 77.0,
    },
    {
        "name": "Madhya Pradesh Forests",
        "min_lat": 21.0,
        "max_lat": 26.9,
        "min_lon": 74.0,
        "max_lon": 82.8,
    },
]


async def seed_zones() -> None:
    """Register the demo zones as the current authority (idempotent)."""
    services = get_services()
    if await services.zones.zone_count() > 0:
        print("Zones already seeded, skipping.")
        return

    authority = await services.zones.authority()
    for zone in ZONES:
        zone_id = await services.zones.register_zone(
            authority,
            zone["name"],
            to_microdegrees(zone["min_lat"]),
            to_microdegrees(zone["max_lat"]),
            to_microdegrees(zone["min_lon"]),
            to_microdegrees(zone["max_lon"]),
        )
        print(f"  zone {zone_id}: {zone['name']}")

    print(f"Seeded {len(ZONES)} zones.")


if __name__ == "__main__":
    asyncio.run(seed_zones())
