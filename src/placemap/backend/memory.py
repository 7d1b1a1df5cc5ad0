"""In-memory places backend."""

from __future__ import annotations

from datetime import UTC, date, datetime
from types import TracebackType
from typing import Any

from pydantic import ValidationError

from placemap.backend.base import PlaceBackend
from placemap.exceptions import BackendRejectedError
from placemap.identity import index_of
from placemap.models.enums import PlaceStatus
from placemap.models.place import Place, PlaceDraft, PlaceUpdate, format_calendar_date


class InMemoryPlaceBackend(PlaceBackend):
    """Backend that keeps records in a list and assigns deterministic ids.

    It applies the same status semantics as the HTTP backend: marking a place
    visited clears its planned date and marking it planned clears its visit
    fields.
    """

    def __init__(self, places: list[Place] | None = None) -> None:
        self._places: list[Place] = list(places or [])
        self._counter = len(self._places)

    async def __aenter__(self) -> InMemoryPlaceBackend:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    @property
    def records(self) -> list[Place]:
        return list(self._places)

    async def list_places(self) -> list[Place]:
        return list(self._places)

    async def create_place(self, draft: PlaceDraft) -> Place:
        self._counter += 1
        now = _timestamp()
        record = {**draft.to_payload(), "_id": f"place-{self._counter}", "createdAt": now, "updatedAt": now}
        place = self._validate(record)
        self._places.append(place)
        return place

    async def update_place(self, place_id: str, update: PlaceUpdate) -> Place:
        return self._replace(place_id, update.to_payload())

    async def mark_visited(self, place_id: str, *, visit_date: date, visit_description: str) -> Place:
        current = self._places[self._require_index(place_id)]
        return self._replace(
            place_id,
            {
                "status": PlaceStatus.VISITED.value,
                "visitDate": format_calendar_date(visit_date),
                "visitDescription": visit_description or current.description,
                "plannedDate": None,
            },
        )

    async def mark_planned(self, place_id: str, *, planned_date: date) -> Place:
        return self._replace(
            place_id,
            {
                "status": PlaceStatus.PLANNED.value,
                "plannedDate": format_calendar_date(planned_date),
                "visitDate": None,
                "visitDescription": None,
            },
        )

    async def delete_place(self, place_id: str) -> None:
        del self._places[self._require_index(place_id)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_index(self, place_id: str) -> int:
        index = index_of(self._places, place_id)
        if index is None:
            raise BackendRejectedError(f"Place not found: {place_id}")
        return index

    def _replace(self, place_id: str, changes: dict[str, Any]) -> Place:
        index = self._require_index(place_id)
        merged = {**self._places[index].to_payload(), **changes, "updatedAt": _timestamp()}
        place = self._validate(merged)
        self._places[index] = place
        return place

    @staticmethod
    def _validate(record: dict[str, Any]) -> Place:
        try:
            return Place.model_validate(record)
        except ValidationError as exc:
            raise BackendRejectedError(f"Invalid place: {exc}") from exc


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()
