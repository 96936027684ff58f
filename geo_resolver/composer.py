from __future__ import annotations

from geo_resolver.models import CityMatch, MatchOutcome, RegionMatch, ResolutionResult


def compose(outcome: MatchOutcome) -> ResolutionResult:
    """Derive postal code, federal district and display labels from a match."""
    if isinstance(outcome, CityMatch):
        return ResolutionResult(
            match=outcome,
            postal_code=outcome.city.postal_code,
            federal_district=outcome.region.federal_district,
            region_with_type=outcome.region.region_with_type,
            city_with_type=outcome.city.city_with_type,
        )
    if isinstance(outcome, RegionMatch):
        return ResolutionResult(
            match=outcome,
            postal_code=outcome.region.postal_code,
            federal_district=outcome.region.federal_district,
            region_with_type=outcome.region.region_with_type,
        )
    return ResolutionResult(match=outcome)
