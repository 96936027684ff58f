"""Resolve free-form address text into a reference City and/or Region."""

from geo_resolver.errors import GeoResolverError, InvalidArgumentError, ReferenceNotFoundError
from geo_resolver.resolver import GeoResolver

__all__ = [
    "GeoResolver",
    "GeoResolverError",
    "InvalidArgumentError",
    "ReferenceNotFoundError",
]
