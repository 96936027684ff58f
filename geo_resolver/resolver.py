"""
GeoResolver: normalize -> match -> compose, one text at a time.

Each instance owns its last result and a dictionary that is built on first
use and kept for the instance's lifetime. Instances are not thread-safe; use
one per thread, sharing a prebuilt dictionary if needed:

    snapshot = shared.get()
    resolver = GeoResolver(snapshot.store, dictionary=snapshot.dictionary)
    if resolver.parse("проживаю в г Севастополь"):
        print(resolver.postal_code)
"""

from __future__ import annotations

import logging
from typing import Optional

from geo_resolver.composer import compose
from geo_resolver.dictionary import GeoDictionary, load_dictionary
from geo_resolver.errors import InvalidArgumentError
from geo_resolver.matcher import match
from geo_resolver.models import City, Region, ResolutionResult
from geo_resolver.normalize import normalize
from geo_resolver.store import ReferenceStore

logger = logging.getLogger(__name__)


class GeoResolver:
    def __init__(
        self,
        store: ReferenceStore,
        text: Optional[str] = None,
        dictionary: Optional[GeoDictionary] = None,
    ):
        self._store = store
        self._dictionary = dictionary
        self._result = ResolutionResult()
        self.search: Optional[str] = None

        if text is not None:
            self.parse(text)

    @property
    def dictionary(self) -> GeoDictionary:
        if self._dictionary is None:
            self._dictionary = load_dictionary(self._store)
        return self._dictionary

    def resolve(self, text: str) -> ResolutionResult:
        """
        Resolve text into a city and/or region.
        Raises InvalidArgumentError for empty text, before touching reference data.
        """
        if not text:
            raise InvalidArgumentError("Text to resolve must be a non-empty string")

        self.search = text
        self._result = ResolutionResult()

        normalized = normalize(text)
        outcome = match(normalized, self.dictionary, self._store)
        self._result = compose(outcome)

        logger.debug("Resolved %r -> %s", normalized, self._result.match.kind)
        return self._result

    def parse(self, text: str) -> bool:
        return self.resolve(text).found

    def is_found(self) -> bool:
        return self._result.found

    # ── Last result ──────────────────────────────────────────────────────

    @property
    def result(self) -> ResolutionResult:
        return self._result

    @property
    def found(self) -> bool:
        return self._result.found

    @property
    def city(self) -> Optional[City]:
        return self._result.city

    @property
    def region(self) -> Optional[Region]:
        return self._result.region

    @property
    def postal_code(self) -> Optional[str]:
        return self._result.postal_code

    @property
    def federal_district(self) -> Optional[str]:
        return self._result.federal_district

    @property
    def region_with_type(self) -> Optional[str]:
        return self._result.region_with_type

    @property
    def city_with_type(self) -> Optional[str]:
        return self._result.city_with_type
