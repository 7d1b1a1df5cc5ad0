"""Abstract external geocoding provider."""

from __future__ import annotations

from abc import ABC, abstractmethod

from placemap.geocoding.models import GeocodeHit, ReverseAddress


class GeocodingProvider(ABC):
    """Forward and reverse lookups against an external service."""

    @abstractmethod
    async def search(self, query: str) -> GeocodeHit | None:
        """Return the first result for free-text *query*, or *None* when there is none.

        Raises:
            GeocodingError: If the provider call fails.
        """

    @abstractmethod
    async def reverse(self, latitude: float, longitude: float) -> ReverseAddress | None:
        """Return the structured address at the given point, or *None*.

        Raises:
            GeocodingError: If the provider call fails.
        """
