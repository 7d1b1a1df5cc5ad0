"""HTTP backend speaking the ``{success, data}`` envelope protocol."""

from __future__ import annotations

import logging
from datetime import date
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from placemap.backend.base import PlaceBackend
from placemap.exceptions import BackendError, BackendRejectedError, BackendTransportError
from placemap.models.place import Place, PlaceDraft, PlaceUpdate, format_calendar_date

logger = logging.getLogger(__name__)


class HttpPlaceBackend(PlaceBackend):
    """Backend adapter over ``httpx.AsyncClient``.

    Failed requests are never retried: a transport error, an error status
    without a decodable envelope, or ``success: false`` fail the call.

    Args:
        base_url: Root URL of the places API.
        timeout: Per-request timeout in seconds.
        transport: Optional transport override (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HttpPlaceBackend:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers={"Accept": "application/json"},
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

    async def list_places(self) -> list[Place]:
        payload = await self._request("GET", "/places")
        data = payload.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            raise BackendTransportError("GET /places returned a non-list data payload")
        return [self._parse_place(record) for record in data]

    async def create_place(self, draft: PlaceDraft) -> Place:
        payload = await self._request("POST", "/places", json=draft.to_payload())
        return self._parse_place(payload.get("data"))

    async def update_place(self, place_id: str, update: PlaceUpdate) -> Place:
        payload = await self._request("PUT", self._place_path(place_id), json=update.to_payload())
        return self._parse_place(payload.get("data"))

    async def mark_visited(self, place_id: str, *, visit_date: date, visit_description: str) -> Place:
        body = {"visitDate": format_calendar_date(visit_date), "visitDescription": visit_description}
        payload = await self._request("PATCH", f"{self._place_path(place_id)}/visit", json=body)
        return self._parse_place(payload.get("data"))

    async def mark_planned(self, place_id: str, *, planned_date: date) -> Place:
        body = {"plannedDate": format_calendar_date(planned_date)}
        payload = await self._request("PATCH", f"{self._place_path(place_id)}/plan", json=body)
        return self._parse_place(payload.get("data"))

    async def delete_place(self, place_id: str) -> None:
        payload = await self._request("DELETE", self._place_path(place_id))
        logger.debug("deleted place %s: %s", place_id, payload.get("message"))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _place_path(place_id: str) -> str:
        return f"/places/{quote(place_id, safe='')}"

    async def _request(self, method: str, path: str, *, json: Any = None) -> dict[str, Any]:
        if self._client is None:
            raise BackendError("Backend is not initialized. Use 'async with'.")

        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise BackendTransportError(f"{method} {path} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict) or "success" not in payload:
            if response.is_error:
                raise BackendTransportError(f"{method} {path} returned HTTP {response.status_code}")
            raise BackendTransportError(f"{method} {path} returned an invalid envelope")

        if payload.get("success") is not True:
            message = payload.get("message")
            raise BackendRejectedError(message if isinstance(message, str) else None)
        if response.is_error:
            raise BackendTransportError(f"{method} {path} returned HTTP {response.status_code}")
        return payload

    @staticmethod
    def _parse_place(record: Any) -> Place:
        if not isinstance(record, dict):
            raise BackendTransportError("Missing/invalid place record in response data")
        try:
            return Place.model_validate(record)
        except ValidationError as exc:
            raise BackendTransportError(f"Invalid place record from backend: {exc}") from exc
