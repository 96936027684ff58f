"""
Reference data access.

The resolver reads cities and regions through the ReferenceStore protocol.
InMemoryReferenceStore is a read-only snapshot used both for JSON Lines
reference files and for data copied out of Postgres (see db.load_reference_store).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from geo_resolver.errors import ReferenceNotFoundError
from geo_resolver.models import City, Region

logger = logging.getLogger(__name__)


class ReferenceStore(Protocol):
    def list_cities(self) -> Sequence[City]:
        """All cities ordered by name ascending."""
        ...

    def list_regions(self) -> Sequence[Region]:
        """All regions ordered by name ascending."""
        ...

    def get_city_by_id(self, city_id: int) -> City:
        ...

    def get_region_by_id(self, region_id: int) -> Region:
        ...


class InMemoryReferenceStore:
    """
    Immutable snapshot of the reference data, ordered by name.

    Pass presorted=True when the records already come in the desired order
    (e.g. ORDER BY name under the database collation); otherwise they are
    sorted by Python string order.
    """

    def __init__(self, regions: Iterable[Region], cities: Iterable[City], presorted: bool = False):
        if presorted:
            self._regions = tuple(regions)
            self._cities = tuple(cities)
        else:
            self._regions = tuple(sorted(regions, key=lambda r: r.name))
            self._cities = tuple(sorted(cities, key=lambda c: c.name))
        self._regions_by_id = {r.id: r for r in self._regions}
        self._cities_by_id = {c.id: c for c in self._cities}

    @classmethod
    def from_records(cls, rows: Iterable[dict]) -> "InMemoryReferenceStore":
        """Build from dicts tagged with "type": "region" or "city"."""
        regions: list[Region] = []
        cities: list[City] = []
        for row in rows:
            kind = row.get("type")
            if kind == "region":
                regions.append(Region.model_validate(row))
            elif kind == "city":
                cities.append(City.model_validate(row))
            else:
                raise ValueError(f"Unknown reference row type: {kind!r}")
        return cls(regions, cities)

    @classmethod
    def from_jsonl(cls, path: Path | str) -> "InMemoryReferenceStore":
        store = cls.from_records(read_jsonl(Path(path)))
        logger.info("Loaded reference file %s (%d regions, %d cities)",
                    path, len(store._regions), len(store._cities))
        return store

    def list_cities(self) -> Sequence[City]:
        return self._cities

    def list_regions(self) -> Sequence[Region]:
        return self._regions

    def get_city_by_id(self, city_id: int) -> City:
        try:
            return self._cities_by_id[city_id]
        except KeyError:
            raise ReferenceNotFoundError("City", city_id) from None

    def get_region_by_id(self, region_id: int) -> Region:
        try:
            return self._regions_by_id[region_id]
        except KeyError:
            raise ReferenceNotFoundError("Region", region_id) from None


def read_jsonl(path: Path) -> list[dict]:
    rows: list[dict] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                rows.append(json.loads(line))
    return rows
