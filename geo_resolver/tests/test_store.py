"""
Tests for the in-memory reference store.
"""

from __future__ import annotations

import asyncio
import json

import pytest

from geo_resolver.errors import ReferenceNotFoundError
from geo_resolver.models import City, Region
from geo_resolver.store import InMemoryReferenceStore

ROWS = [
    {"type": "region", "id": 3, "name": "Севастополь", "postal_code": "299000"},
    {"type": "region", "id": 1, "name": "Адыгея", "synonyms": ["Адыгее"]},
    {"type": "city", "id": 11, "name": "Севастополь", "region_id": 3},
    {"type": "city", "id": 12, "name": "Майкоп", "synonyms": ["Maykop"], "region_id": 1},
]


class TestInMemoryReferenceStore:
    def test_sorted_by_name(self):
        store = InMemoryReferenceStore.from_records(ROWS)
        assert [r.name for r in store.list_regions()] == ["Адыгея", "Севастополь"]
        assert [c.name for c in store.list_cities()] == ["Майкоп", "Севастополь"]

    def test_lookup_by_id(self):
        store = InMemoryReferenceStore.from_records(ROWS)
        assert store.get_city_by_id(12).synonyms == ("Maykop",)
        assert store.get_region_by_id(3).postal_code == "299000"

    def test_missing_id_raises_lookup_error(self):
        store = InMemoryReferenceStore([Region(id=1, name="Адыгея")], [])
        with pytest.raises(ReferenceNotFoundError):
            store.get_region_by_id(2)
        with pytest.raises(LookupError):
            store.get_city_by_id(1)

    def test_unknown_row_type(self):
        with pytest.raises(ValueError):
            InMemoryReferenceStore.from_records([{"type": "street", "id": 1, "name": "Ленина"}])

    def test_from_jsonl(self, tmp_path):
        path = tmp_path / "reference.jsonl"
        lines = [json.dumps(row, ensure_ascii=False) for row in ROWS]
        path.write_text("\n".join(lines) + "\n\n", encoding="utf-8")

        store = InMemoryReferenceStore.from_jsonl(path)
        assert len(store.list_regions()) == 2
        assert len(store.list_cities()) == 2
        assert isinstance(store.get_city_by_id(11), City)


class TestPresortedStore:
    # Collation order (ru_RU): "Абакан" < "Ёлкино", while Python puts "Ё" first
    CITIES = [
        City(id=1, name="Абакан", region_id=1),
        City(id=2, name="Ёлкино", region_id=1),
    ]

    def test_presorted_keeps_input_order(self):
        store = InMemoryReferenceStore([], self.CITIES, presorted=True)
        assert [c.name for c in store.list_cities()] == ["Абакан", "Ёлкино"]

    def test_default_sorts_by_python_order(self):
        store = InMemoryReferenceStore([], self.CITIES)
        assert [c.name for c in store.list_cities()] == ["Ёлкино", "Абакан"]

    def test_database_load_keeps_query_order(self, monkeypatch):
        from contextlib import asynccontextmanager

        from geo_resolver import db

        regions = [Region(id=1, name="Хакасия")]

        @asynccontextmanager
        async def fake_connection():
            yield None

        async def fake_fetch_regions(conn):
            return regions

        async def fake_fetch_cities(conn):
            return list(self.CITIES)

        monkeypatch.setattr(db, "get_connection", fake_connection)
        monkeypatch.setattr(db, "fetch_regions", fake_fetch_regions)
        monkeypatch.setattr(db, "fetch_cities", fake_fetch_cities)

        store = asyncio.run(db.load_reference_store())
        assert [c.name for c in store.list_cities()] == ["Абакан", "Ёлкино"]
