"""Canned geocoding provider."""

from __future__ import annotations

from placemap.exceptions import GeocodingError
from placemap.geocoding import GeocodeHit, GeocodingProvider, ReverseAddress


class StubGeocoder(GeocodingProvider):
    """Provider returning canned answers, or raising when ``failing`` is set."""

    def __init__(
        self,
        *,
        hit: GeocodeHit | None = None,
        address: ReverseAddress | None = None,
        failing: bool = False,
    ) -> None:
        self.hit = hit
        self.address = address
        self.failing = failing
        self.queries: list[str] = []
        self.points: list[tuple[float, float]] = []

    async def search(self, query: str) -> GeocodeHit | None:
        self.queries.append(query)
        if self.failing:
            raise GeocodingError("geocoder unavailable")
        return self.hit

    async def reverse(self, latitude: float, longitude: float) -> ReverseAddress | None:
        self.points.append((latitude, longitude))
        if self.failing:
            raise GeocodingError("geocoder unavailable")
        return self.address
