"""
FastAPI service exposing address resolution.

Endpoints:
  GET /resolve  - Resolve a text fragment into a city and/or region
  GET /health   - Reference data and dictionary snapshot metrics
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from geo_resolver.config import get_settings
from geo_resolver.dictionary import SharedDictionary
from geo_resolver.errors import InvalidArgumentError
from geo_resolver.models import HealthResponse, ResolveResponse
from geo_resolver.resolver import GeoResolver
from geo_resolver.store import InMemoryReferenceStore

logger = logging.getLogger(__name__)

_shared: Optional[SharedDictionary] = None


async def _load_store() -> InMemoryReferenceStore:
    settings = get_settings()
    if settings.reference.reference_file:
        return InMemoryReferenceStore.from_jsonl(settings.reference.reference_file)

    from geo_resolver.db import load_reference_store

    return await load_reference_store()


# ── Lifespan ──────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load reference data and build the dictionary. Shutdown: close pool."""
    global _shared
    logger.info("Starting up API server...")
    store = await _load_store()
    _shared = SharedDictionary(store)
    _shared.get()
    yield
    _shared = None
    if not get_settings().reference.reference_file:
        from geo_resolver.db import close_pool

        await close_pool()
    logger.info("API server shut down.")


# ── App ───────────────────────────────────────────────────────────────

app = FastAPI(
    title="Geo Resolver API",
    description="Resolve free-form address text into a city and region",
    version="1.0.0",
    lifespan=lifespan,
)


def get_shared_dictionary() -> SharedDictionary:
    if _shared is None:
        raise HTTPException(503, "Reference data not loaded")
    return _shared


# ══════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ══════════════════════════════════════════════════════════════════════

@app.get("/resolve", response_model=ResolveResponse)
def resolve_text(
    text: str = Query(..., max_length=2000, description="Free-form address text"),
    shared: SharedDictionary = Depends(get_shared_dictionary),
):
    snapshot = shared.get()
    resolver = GeoResolver(snapshot.store, dictionary=snapshot.dictionary)
    try:
        result = resolver.resolve(text)
    except InvalidArgumentError as e:
        raise HTTPException(400, str(e))

    return ResolveResponse.from_result(text, result)


@app.get("/health", response_model=HealthResponse)
def health_check(shared: SharedDictionary = Depends(get_shared_dictionary)):
    snapshot = shared.get()
    return HealthResponse(
        status="ok",
        regions=len(snapshot.store.list_regions()),
        cities=len(snapshot.store.list_cities()),
        city_entries=len(snapshot.dictionary.cities),
        region_entries=len(snapshot.dictionary.regions),
        snapshot_version=snapshot.version,
        loaded_at=snapshot.loaded_at,
    )
