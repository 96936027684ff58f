"""
Reference data seeding.
Reads a JSON Lines reference file, validates rows with Pydantic,
and upserts regions then cities into Postgres in one transaction.
"""

from __future__ import annotations

import logging
from pathlib import Path

from geo_resolver.store import InMemoryReferenceStore

logger = logging.getLogger(__name__)


async def seed_from_jsonl(path: Path) -> dict:
    """
    Load a reference file into Postgres.
    Returns stats dict with counts.
    """
    from geo_resolver.db import get_connection, upsert_city, upsert_region

    store = InMemoryReferenceStore.from_jsonl(path)
    regions = store.list_regions()
    cities = store.list_cities()

    async with get_connection() as conn:
        async with conn.transaction():
            # Cities reference regions, so regions go first
            for region in regions:
                await upsert_region(conn, region)
            for city in cities:
                await upsert_city(conn, city)

    stats = {"regions": len(regions), "cities": len(cities)}
    logger.info("Seeding complete: %s", stats)
    return stats
