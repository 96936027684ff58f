"""
Exception types raised by the resolver.

"Nothing matched" is not an error: it is a result with found == False.
"""

from __future__ import annotations


class GeoResolverError(Exception):
    """Base class for resolver errors."""


class InvalidArgumentError(GeoResolverError, ValueError):
    """Raised when the text to resolve is empty."""


class ReferenceNotFoundError(GeoResolverError, LookupError):
    """Raised by a reference store when an id has no record."""

    def __init__(self, kind: str, entity_id: int):
        super().__init__(f"{kind} with id={entity_id} not found in reference data")
        self.kind = kind
        self.entity_id = entity_id
