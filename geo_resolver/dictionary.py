"""
Name/synonym dictionaries scanned by the matcher.

Each dictionary is an ordered tuple of (text, entity id) entries rather than a
dict keyed by text: scan order is registration order, and when two entities
register the same text the first registration is kept. Registration order is
the store's order (name ascending), with each entity's name followed by its
synonyms.

A GeoDictionary is never mutated after construction. SharedDictionary hands
one snapshot to many resolvers and swaps in a new one on explicit refresh.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from geo_resolver.models import City, Region
from geo_resolver.store import ReferenceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DictionaryEntry:
    text: str
    entity_id: int
    needle: str = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "needle", self.text.lower())


@dataclass(frozen=True)
class GeoDictionary:
    cities: tuple[DictionaryEntry, ...] = ()
    regions: tuple[DictionaryEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.cities) + len(self.regions)


def build_index(records: Iterable[Union[City, Region]]) -> tuple[DictionaryEntry, ...]:
    """Register each record's name, then its synonyms; first write wins."""
    entries: list[DictionaryEntry] = []
    seen: set[str] = set()

    def register(text: str, entity_id: int) -> None:
        if not text or not text.strip():
            return
        key = text.lower()
        if key in seen:
            return
        seen.add(key)
        entries.append(DictionaryEntry(text, entity_id))

    for record in records:
        register(record.name, record.id)
        for synonym in record.synonyms:
            register(synonym, record.id)

    return tuple(entries)


def load_dictionary(store: ReferenceStore) -> GeoDictionary:
    """Read all cities and regions once and index them."""
    dictionary = GeoDictionary(
        cities=build_index(store.list_cities()),
        regions=build_index(store.list_regions()),
    )
    logger.info("Built geo dictionary: %d city entries, %d region entries",
                len(dictionary.cities), len(dictionary.regions))
    return dictionary


@dataclass(frozen=True)
class DictionarySnapshot:
    store: ReferenceStore
    dictionary: GeoDictionary
    version: int
    loaded_at: datetime


class SharedDictionary:
    """
    Process-wide holder for a read-only dictionary snapshot.

    get() builds the first snapshot lazily. refresh() builds a complete new
    snapshot before swapping it in, so callers holding the previous one keep
    reading a consistent dictionary. Nothing refreshes automatically.
    """

    def __init__(self, store: ReferenceStore):
        self._store = store
        self._lock = threading.Lock()
        self._snapshot: Optional[DictionarySnapshot] = None

    @property
    def store(self) -> ReferenceStore:
        return self._store

    def get(self) -> DictionarySnapshot:
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._build(version=1)
            return self._snapshot

    def refresh(self, store: Optional[ReferenceStore] = None) -> DictionarySnapshot:
        with self._lock:
            if store is not None:
                self._store = store
            version = self._snapshot.version + 1 if self._snapshot else 1
            self._snapshot = self._build(version=version)
            logger.info("Geo dictionary refreshed to version %d", version)
            return self._snapshot

    def _build(self, version: int) -> DictionarySnapshot:
        return DictionarySnapshot(
            store=self._store,
            dictionary=load_dictionary(self._store),
            version=version,
            loaded_at=datetime.now(timezone.utc),
        )
