"""Backend fakes for store and lifecycle tests."""

from __future__ import annotations

from datetime import date

from placemap.backend import InMemoryPlaceBackend
from placemap.exceptions import BackendTransportError
from placemap.models import Place, PlaceDraft, PlaceUpdate


class FlakyBackend(InMemoryPlaceBackend):
    """In-memory backend that records calls and can be switched to fail.

    When ``failing`` is set every operation raises
    :class:`BackendTransportError` before touching the records.
    """

    def __init__(self, places: list[Place] | None = None, *, failing: bool = False) -> None:
        super().__init__(places)
        self.failing = failing
        self.calls: list[str] = []

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.failing:
            raise BackendTransportError(f"{name} failed: connection refused")

    async def list_places(self) -> list[Place]:
        self._enter("list_places")
        return await super().list_places()

    async def create_place(self, draft: PlaceDraft) -> Place:
        self._enter("create_place")
        return await super().create_place(draft)

    async def update_place(self, place_id: str, update: PlaceUpdate) -> Place:
        self._enter("update_place")
        return await super().update_place(place_id, update)

    async def mark_visited(self, place_id: str, *, visit_date: date, visit_description: str) -> Place:
        self._enter("mark_visited")
        return await super().mark_visited(place_id, visit_date=visit_date, visit_description=visit_description)

    async def mark_planned(self, place_id: str, *, planned_date: date) -> Place:
        self._enter("mark_planned")
        return await super().mark_planned(place_id, planned_date=planned_date)

    async def delete_place(self, place_id: str) -> None:
        self._enter("delete_place")
        await super().delete_place(place_id)
