"""Resolve free text or a map click into a place name and coordinates.

The bundled directory is always consulted first; the external provider is
only asked when the directory has nothing. Provider failures never escape:
forward search turns them into a not-found result and reverse lookup into
"no label".
"""

from __future__ import annotations

import logging

from placemap.exceptions import GeocodingError
from placemap.geocoding.base import GeocodingProvider
from placemap.geocoding.directory import PlaceDirectory
from placemap.geocoding.models import ResolvedLocation, ReverseAddress
from placemap.geocoding.normalize import normalize_text
from placemap.models.directory import PlaceDirectoryEntry

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Location not found. Try another name or click on the map."
UNKNOWN_PLACE_LABEL = "Selected location"


def address_label(address: ReverseAddress) -> str:
    """Human label for an address: city, town, village, state, country, then a placeholder."""
    for candidate in (address.city, address.town, address.village, address.state, address.country):
        if candidate:
            return candidate
    return UNKNOWN_PLACE_LABEL


class GeocodingResolver:
    """Directory-first geocoding.

    Args:
        directory: Bundled place directory.
        provider: External provider, or *None* to stay offline.
        suggestion_limit: Maximum suggestions returned by :meth:`suggest`.
        min_query_length: Normalized characters needed before suggesting.
    """

    def __init__(
        self,
        directory: PlaceDirectory,
        provider: GeocodingProvider | None = None,
        *,
        suggestion_limit: int = 10,
        min_query_length: int = 2,
    ) -> None:
        self._directory = directory
        self._provider = provider
        self._suggestion_limit = suggestion_limit
        self._min_query_length = min_query_length

    def suggest(self, query: str) -> list[PlaceDirectoryEntry]:
        """Directory suggestions for an autocomplete box.

        Queries shorter than the minimum normalized length clear the list.
        """
        if len(normalize_text(query)) < self._min_query_length:
            return []
        return self._directory.suggest(query, limit=self._suggestion_limit)

    async def search(self, query: str) -> ResolvedLocation | None:
        """Direct search: exact directory name first, then the provider's first result.

        Returns *None* when nothing is found or the provider fails.
        """
        entry = self._directory.find_exact(query)
        if entry is not None:
            return ResolvedLocation.from_entry(entry)

        text = query.strip()
        if not text or self._provider is None:
            return None
        try:
            hit = await self._provider.search(text)
        except GeocodingError as exc:
            logger.warning("Forward geocoding failed for %r: %s", text, exc)
            return None
        if hit is None:
            logger.info("No geocoding result for %r", text)
            return None
        return ResolvedLocation(name=text, coordinates=hit.coordinates, source="provider")

    async def reverse(self, latitude: float, longitude: float) -> str | None:
        """Label for a clicked point, or *None* when the lookup is unavailable or fails."""
        if self._provider is None:
            return None
        try:
            address = await self._provider.reverse(latitude, longitude)
        except GeocodingError as exc:
            logger.warning("Reverse geocoding failed for (%s, %s): %s", latitude, longitude, exc)
            return None
        if address is None:
            return UNKNOWN_PLACE_LABEL
        return address_label(address)
