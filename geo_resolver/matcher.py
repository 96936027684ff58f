"""
Substring matcher over the geo dictionary.

Strategy:
  - Lowercase the normalized text once.
  - Scan city entries in registration order; the first entry contained in the
    text wins and scanning stops. No attempt is made to find a longer match.
  - A city match carries the city's own region; regions are not scanned.
  - Otherwise scan region entries the same way.
  - Matching is literal: "москва" matches inside "москвариум".
"""

from __future__ import annotations

import logging
from typing import Optional

from geo_resolver.dictionary import DictionaryEntry, GeoDictionary
from geo_resolver.models import CityMatch, MatchOutcome, NotFound, RegionMatch
from geo_resolver.store import ReferenceStore

logger = logging.getLogger(__name__)


def _first_hit(text: str, entries: tuple[DictionaryEntry, ...]) -> Optional[DictionaryEntry]:
    for entry in entries:
        # "" is a substring of everything
        if entry.needle and entry.needle in text:
            return entry
    return None


def match(normalized_text: str, dictionary: GeoDictionary, store: ReferenceStore) -> MatchOutcome:
    text = normalized_text.lower()

    entry = _first_hit(text, dictionary.cities)
    if entry is not None:
        city = store.get_city_by_id(entry.entity_id)
        region = store.get_region_by_id(city.region_id)
        logger.debug("City match %r -> %s (region %s)", entry.text, city.name, region.name)
        return CityMatch(city=city, region=region)

    entry = _first_hit(text, dictionary.regions)
    if entry is not None:
        region = store.get_region_by_id(entry.entity_id)
        logger.debug("Region match %r -> %s", entry.text, region.name)
        return RegionMatch(region=region)

    return NotFound()
