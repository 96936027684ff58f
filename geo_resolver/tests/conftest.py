"""Shared fixtures: a small Russian reference dataset held in memory."""

from __future__ import annotations

import pytest

from geo_resolver.models import City, Region
from geo_resolver.store import InMemoryReferenceStore

REGIONS = [
    Region(id=1, name="Адыгея", synonyms=["Респ Адыгея", "Адыгее"], postal_code="385000",
           federal_district="Южный", region_with_type="Респ Адыгея"),
    Region(id=2, name="Московская", synonyms=["Подмосковье"], postal_code="140000",
           federal_district="Центральный", region_with_type="Московская обл"),
    Region(id=3, name="Севастополь", postal_code="299000",
           federal_district="Южный", region_with_type="г Севастополь"),
]

CITIES = [
    City(id=10, name="Москва", synonyms=["Мск"], postal_code="101000",
         city_with_type="г Москва", region_id=2),
    City(id=11, name="Севастополь", postal_code="299000",
         city_with_type="г Севастополь", region_id=3),
    City(id=12, name="Майкоп", synonyms=["Maykop"], postal_code="385000",
         city_with_type="г Майкоп", region_id=1),
]


class CountingStore(InMemoryReferenceStore):
    """Counts list_* calls so tests can assert how often data is loaded."""

    def __init__(self, regions, cities):
        super().__init__(regions, cities)
        self.list_calls = 0

    def list_cities(self):
        self.list_calls += 1
        return super().list_cities()


@pytest.fixture
def store():
    return CountingStore(REGIONS, CITIES)
