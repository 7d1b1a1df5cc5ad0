"""Place lifecycle operations: the planned/visited state machine.

Every operation checks its preconditions locally before any I/O: unknown
identities, empty required text, an invalid transition, or a declined
confirmation never reach the store.
"""

from __future__ import annotations

import calendar
import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import date

from placemap.exceptions import OperationCancelledError, PlaceNotFoundError, PlaceValidationError
from placemap.models.enums import PlaceStatus
from placemap.models.place import DEFAULT_CENTER, Place, PlaceDraft
from placemap.store.store import PlaceStore

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool | Awaitable[bool]]
"""Asks the user a yes/no question; may be sync or async."""


def add_months(value: date, months: int) -> date:
    """Shift *value* by whole calendar months, clamping the day to the month end."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def new_draft(today: date | None = None) -> PlaceDraft:
    """Empty add-place draft, planned one month ahead at the default centroid."""
    start = today or date.today()
    return PlaceDraft(planned_date=add_months(start, 1))


def validate_draft(draft: PlaceDraft) -> list[str]:
    errors: list[str] = []
    if not draft.name.strip():
        errors.append("name is required")
    if not draft.description.strip():
        errors.append("description is required")
    if draft.coordinates == DEFAULT_CENTER:
        errors.append("choose a location on the map or search for one")
    if draft.status is not PlaceStatus.PLANNED:
        errors.append("new places start as planned")
    elif draft.planned_date is None:
        errors.append("planned date is required")
    return errors


class PlaceLifecycle:
    """Single-place transitions layered on a :class:`PlaceStore`.

    Args:
        store: Store that performs the writes.
        confirm: Callback used for destructive or reversing transitions.
    """

    def __init__(self, store: PlaceStore, *, confirm: Confirm | None = None) -> None:
        self._store = store
        self._confirm = confirm

    async def plan_place(self, draft: PlaceDraft) -> Place:
        """Create a planned place from a filled-in draft.

        Raises:
            PlaceValidationError: If required fields are missing.
        """
        errors = validate_draft(draft)
        if errors:
            raise PlaceValidationError(errors)
        place = await self._store.create(draft)
        logger.info("Planned %s", place.name)
        return place

    async def mark_visited(self, place_id: str, narrative: str) -> Place:
        """``planned → visited`` with the user's account of the visit.

        Raises:
            PlaceNotFoundError: If *place_id* is unknown.
            PlaceValidationError: If the narrative is empty or the place is already visited.
        """
        place = self._require(place_id)
        text = (narrative or "").strip()
        errors: list[str] = []
        if place.status is PlaceStatus.VISITED:
            errors.append(f"{place.name} is already visited")
        if not text:
            errors.append("tell how the visit went")
        if errors:
            raise PlaceValidationError(errors)
        return await self._store.transition_to_visited(place_id, text)

    async def mark_planned(self, place_id: str, *, confirmed: bool = False) -> Place:
        """``visited → planned``; discards the visit narrative after confirmation.

        Raises:
            PlaceNotFoundError: If *place_id* is unknown.
            PlaceValidationError: If the place is already planned.
            OperationCancelledError: If the user declines.
        """
        place = self._require(place_id)
        if place.status is PlaceStatus.PLANNED:
            raise PlaceValidationError([f"{place.name} is already planned"])
        await self._ensure_confirmed(f"Move {place.name} back to planned places?", confirmed)
        return await self._store.transition_to_planned(place_id)

    async def edit_description(self, place_id: str, text: str) -> Place | None:
        """Edit the text shown for the place: visit narrative if visited, description if planned.

        Returns *None* without writing when *text* is empty or unchanged.
        """
        place = self._require(place_id)
        visited = place.status is PlaceStatus.VISITED
        current = place.visit_description if visited else place.description
        return await self._edit(place_id, text, current=current, visited=visited)

    async def edit_planned_description(self, place_id: str, text: str) -> Place | None:
        """Edit the base description of a planned place.

        Raises:
            PlaceValidationError: If the place is not planned.
        """
        place = self._require(place_id)
        if place.status is not PlaceStatus.PLANNED:
            raise PlaceValidationError([f"{place.name} is not a planned place"])
        return await self._edit(place_id, text, current=place.description, visited=False)

    async def delete(self, place_id: str, *, confirmed: bool = False) -> None:
        """Delete a place permanently after confirmation.

        Raises:
            PlaceNotFoundError: If *place_id* is unknown.
            OperationCancelledError: If the user declines.
        """
        place = self._require(place_id)
        await self._ensure_confirmed(f"Delete {place.name}? This cannot be undone.", confirmed)
        await self._store.delete(place_id)
        logger.info("Deleted %s", place.name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, place_id: str) -> Place:
        place = self._store.get(place_id)
        if place is None:
            raise PlaceNotFoundError(place_id)
        return place

    async def _edit(self, place_id: str, text: str, *, current: str | None, visited: bool) -> Place | None:
        cleaned = (text or "").strip()
        if not cleaned or cleaned == current:
            logger.debug("Discarding empty or unchanged edit for %s", place_id)
            return None
        return await self._store.update_description(place_id, cleaned, visited=visited)

    async def _ensure_confirmed(self, question: str, confirmed: bool) -> None:
        if confirmed:
            return
        if self._confirm is None:
            raise OperationCancelledError(f"Confirmation required: {question}")
        answer = self._confirm(question)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            raise OperationCancelledError(question)
