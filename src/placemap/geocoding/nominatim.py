"""Nominatim (OpenStreetMap) geocoding provider."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from placemap.activity import ActivityKind, ActivityTracker
from placemap.exceptions import GeocodingError
from placemap.geocoding.base import GeocodingProvider
from placemap.geocoding.models import GeocodeHit, ReverseAddress

logger = logging.getLogger(__name__)


class NominatimGeocoder(GeocodingProvider):
    """Provider backed by the Nominatim ``/search`` and ``/reverse`` endpoints.

    Args:
        base_url: Nominatim root URL.
        user_agent: Identifying User-Agent, required by the Nominatim usage policy.
        timeout: Per-request timeout in seconds.
        activity: Tracker counting in-flight lookups.
        transport: Optional transport override (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        *,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "placemap/0.1",
        timeout: float = 10.0,
        activity: ActivityTracker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._activity = activity or ActivityTracker()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> NominatimGeocoder:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers={"User-Agent": self._user_agent, "Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, query: str) -> GeocodeHit | None:
        params = {"format": "json", "q": query, "limit": 1}
        async with self._activity.track(ActivityKind.GEOCODE):
            payload = await self._get("/search", params)
        if not isinstance(payload, list) or not payload:
            return None
        first = payload[0]
        if not isinstance(first, dict):
            raise GeocodingError("Nominatim search returned a malformed result")
        try:
            return GeocodeHit(
                coordinates=(float(first["lat"]), float(first["lon"])),
                display_name=first.get("display_name"),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise GeocodingError(f"Nominatim search returned invalid coordinates: {exc}") from exc

    async def reverse(self, latitude: float, longitude: float) -> ReverseAddress | None:
        params = {"format": "json", "lat": latitude, "lon": longitude, "addressdetails": 1}
        async with self._activity.track(ActivityKind.REVERSE_GEOCODE):
            payload = await self._get("/reverse", params)
        if not isinstance(payload, dict) or "error" in payload:
            return None
        address = payload.get("address")
        if not isinstance(address, dict):
            return None
        try:
            return ReverseAddress.model_validate(address)
        except ValidationError as exc:
            raise GeocodingError(f"Nominatim reverse returned an invalid address: {exc}") from exc

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        if self._client is None:
            raise GeocodingError("Geocoder is not initialized. Use 'async with'.")
        logger.debug("GET %s %s", path, params)
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Nominatim {path} failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodingError(f"Nominatim {path} returned invalid JSON") from exc
