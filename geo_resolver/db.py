"""
Database connection management and reference data queries.
Uses asyncpg for async Postgres access with connection pooling.

Resolution itself never touches the pool: load_reference_store() copies all
regions and cities into an InMemoryReferenceStore inside one scoped
connection, and the resolver works from that snapshot.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import asyncpg

from geo_resolver.config import get_settings
from geo_resolver.models import City, Region
from geo_resolver.store import InMemoryReferenceStore

logger = logging.getLogger(__name__)

# ── Connection Pool ────────────────────────────────────────────────────

_pool: Optional[asyncpg.Pool] = None


async def get_pool() -> asyncpg.Pool:
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = await asyncpg.create_pool(
            dsn=settings.db.dsn,
            min_size=settings.db.min_pool_size,
            max_size=settings.db.max_pool_size,
        )
        logger.info("Database connection pool created (min=%d, max=%d)",
                    settings.db.min_pool_size, settings.db.max_pool_size)
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Database connection pool closed")


@asynccontextmanager
async def get_connection() -> AsyncIterator[asyncpg.Connection]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


# ── Schema Initialization ─────────────────────────────────────────────

async def run_migrations() -> None:
    """Execute SQL migrations in order (idempotent)."""
    migrations_dir = Path(__file__).parent / "migrations"
    migration_paths = sorted(migrations_dir.glob("*.sql"))

    async with get_connection() as conn:
        for path in migration_paths:
            await conn.execute(path.read_text(encoding="utf-8"))
            logger.info("Applied migration: %s", path.name)
    logger.info("Migrations applied successfully (%d files)", len(migration_paths))


# ── Reference Reads ───────────────────────────────────────────────────

async def fetch_regions(conn: asyncpg.Connection) -> list[Region]:
    rows = await conn.fetch(
        """
        SELECT id, name, synonyms, postal_code, federal_district, region_with_type
        FROM regions
        ORDER BY name
        """
    )
    return [Region.model_validate(dict(r)) for r in rows]


async def fetch_cities(conn: asyncpg.Connection) -> list[City]:
    rows = await conn.fetch(
        """
        SELECT id, name, synonyms, postal_code, city_with_type, region_id
        FROM cities
        ORDER BY name
        """
    )
    return [City.model_validate(dict(r)) for r in rows]


async def load_reference_store() -> InMemoryReferenceStore:
    """Copy the whole reference dataset out of Postgres in one connection."""
    async with get_connection() as conn:
        regions = await fetch_regions(conn)
        cities = await fetch_cities(conn)
    logger.info("Loaded reference data from Postgres (%d regions, %d cities)",
                len(regions), len(cities))
    return InMemoryReferenceStore(regions, cities, presorted=True)


# ── Reference Upserts ─────────────────────────────────────────────────

async def upsert_region(conn: asyncpg.Connection, region: Region) -> None:
    await conn.execute(
        """
        INSERT INTO regions (
            id, name, synonyms, postal_code, federal_district, region_with_type
        ) VALUES ($1, $2, $3::jsonb, $4, $5, $6)
        ON CONFLICT (id) DO UPDATE SET
            name = EXCLUDED.name,
            synonyms = EXCLUDED.synonyms,
            postal_code = EXCLUDED.postal_code,
            federal_district = EXCLUDED.federal_district,
            region_with_type = EXCLUDED.region_with_type,
            updated_at = NOW()
        """,
        region.id,
        region.name,
        json.dumps(list(region.synonyms), ensure_ascii=False),
        region.postal_code,
        region.federal_district,
        region.region_with_type,
    )


async def upsert_city(conn: asyncpg.Connection, city: City) -> None:
    await conn.execute(
        """
        INSERT INTO cities (
            id, name, synonyms, postal_code, city_with_type, region_id
        ) VALUES ($1, $2, $3::jsonb, $4, $5, $6)
        ON CONFLICT (id) DO UPDATE SET
            name = EXCLUDED.name,
            synonyms = EXCLUDED.synonyms,
            postal_code = EXCLUDED.postal_code,
            city_with_type = EXCLUDED.city_with_type,
            region_id = EXCLUDED.region_id,
            updated_at = NOW()
        """,
        city.id,
        city.name,
        json.dumps(list(city.synonyms), ensure_ascii=False),
        city.postal_code,
        city.city_with_type,
        city.region_id,
    )
