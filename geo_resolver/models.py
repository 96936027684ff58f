"""
Pydantic models used across the resolver for validation and serialization.
These are pure data objects — no database coupling.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


# ── Reference records ─────────────────────────────────────────────────

class _ReferenceRecord(BaseModel):
    id: int
    name: str
    synonyms: tuple[str, ...] = ()
    postal_code: Optional[str] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("synonyms", mode="before")
    @classmethod
    def parse_synonyms(cls, v):
        """synonyms can arrive as a JSON string (JSONB column), a list, or null."""
        if v is None:
            return ()
        if isinstance(v, str):
            try:
                decoded = json.loads(v)
            except json.JSONDecodeError:
                # A bare string is a single synonym
                return (v,)
            if decoded is None:
                return ()
            if not isinstance(decoded, list):
                # "1905" decodes to a number but is still one synonym
                return (v,)
            return decoded
        return v


class Region(_ReferenceRecord):
    """An administrative region, e.g. "Респ Адыгея"."""
    federal_district: Optional[str] = None
    region_with_type: Optional[str] = None


class City(_ReferenceRecord):
    """A city; always owned by exactly one region."""
    city_with_type: Optional[str] = None
    region_id: int


# ── Match outcomes ────────────────────────────────────────────────────

class NotFound(BaseModel):
    kind: Literal["not_found"] = "not_found"

    model_config = {"frozen": True}


class RegionMatch(BaseModel):
    kind: Literal["region"] = "region"
    region: Region

    model_config = {"frozen": True}


class CityMatch(BaseModel):
    kind: Literal["city"] = "city"
    city: City
    region: Region

    model_config = {"frozen": True}


MatchOutcome = Annotated[Union[NotFound, RegionMatch, CityMatch], Field(discriminator="kind")]


class ResolutionResult(BaseModel):
    """Outcome of one resolution call plus the fields derived from it."""
    match: MatchOutcome = Field(default_factory=NotFound)
    postal_code: Optional[str] = None
    federal_district: Optional[str] = None
    region_with_type: Optional[str] = None
    city_with_type: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def found(self) -> bool:
        return not isinstance(self.match, NotFound)

    @property
    def city(self) -> Optional[City]:
        return self.match.city if isinstance(self.match, CityMatch) else None

    @property
    def region(self) -> Optional[Region]:
        if isinstance(self.match, (CityMatch, RegionMatch)):
            return self.match.region
        return None


# ── API response models ───────────────────────────────────────────────

class ResolveResponse(BaseModel):
    query: str
    found: bool
    match_kind: str
    city: Optional[City] = None
    region: Optional[Region] = None
    postal_code: Optional[str] = None
    federal_district: Optional[str] = None
    region_with_type: Optional[str] = None
    city_with_type: Optional[str] = None

    @classmethod
    def from_result(cls, query: str, result: ResolutionResult) -> "ResolveResponse":
        return cls(
            query=query,
            found=result.found,
            match_kind=result.match.kind,
            city=result.city,
            region=result.region,
            postal_code=result.postal_code,
            federal_district=result.federal_district,
            region_with_type=result.region_with_type,
            city_with_type=result.city_with_type,
        )


class HealthResponse(BaseModel):
    status: str = "ok"
    regions: int = 0
    cities: int = 0
    city_entries: int = 0
    region_entries: int = 0
    snapshot_version: int = 0
    loaded_at: Optional[datetime] = None
