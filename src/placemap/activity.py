"""In-flight I/O accounting and the busy-indicator observer protocol.

Every remote call (backend or geocoder) runs inside
:meth:`ActivityTracker.track`. The tracker owns the only shared counter in the
process and tells a :class:`BusyIndicator` when the first operation starts and
when the last one finishes, so overlapping operations keep a single indicator
visible until all of them complete.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import StrEnum

logger = logging.getLogger(__name__)


class ActivityKind(StrEnum):
    """What an in-flight operation is doing, used to pick the indicator message."""

    DEFAULT = "default"
    PLACES = "places"
    SAVE = "save"
    DELETE = "delete"
    UPDATE = "update"
    VISIT = "visit"
    PLAN = "plan"
    GEOCODE = "geocode"
    REVERSE_GEOCODE = "reverse_geocode"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: dict[ActivityKind, str] = {
    ActivityKind.DEFAULT: "Processing...",
    ActivityKind.PLACES: "Loading your places...",
    ActivityKind.SAVE: "Adding new place to the map...",
    ActivityKind.DELETE: "Removing place from the map...",
    ActivityKind.UPDATE: "Updating place...",
    ActivityKind.VISIT: "Marking as visited...",
    ActivityKind.PLAN: "Moving back to planned...",
    ActivityKind.GEOCODE: "Looking up location...",
    ActivityKind.REVERSE_GEOCODE: "Identifying location...",
}


class BusyIndicator(ABC):
    """Observer for the global busy state.

    ``show`` is called when the tracker goes from idle to busy, ``hide`` when
    it returns to idle.
    """

    @abstractmethod
    def show(self, kind: ActivityKind, message: str) -> None:
        """The system became busy with an operation of *kind*."""
        ...  # pragma: no cover

    @abstractmethod
    def hide(self) -> None:
        """No operation is in flight any more."""
        ...  # pragma: no cover


class NullBusyIndicator(BusyIndicator):
    """No-op implementation used when nothing renders the busy state."""

    def show(self, kind: ActivityKind, message: str) -> None:
        pass

    def hide(self) -> None:
        pass


class ActivityTracker:
    """Counts in-flight I/O operations and drives a :class:`BusyIndicator`."""

    def __init__(self, indicator: BusyIndicator | None = None) -> None:
        self._indicator = indicator or NullBusyIndicator()
        self._count = 0

    @property
    def in_flight(self) -> int:
        return self._count

    @property
    def busy(self) -> bool:
        return self._count > 0

    @asynccontextmanager
    async def track(self, kind: ActivityKind = ActivityKind.DEFAULT) -> AsyncIterator[None]:
        """Hold the busy state for the lifetime of one external I/O call."""
        self._count += 1
        if self._count == 1:
            self._indicator.show(kind, kind.message)
        logger.debug("activity start: %s (in flight: %d)", kind, self._count)
        try:
            yield
        finally:
            self._count = max(0, self._count - 1)
            logger.debug("activity end: %s (in flight: %d)", kind, self._count)
            if self._count == 0:
                self._indicator.hide()

    def force_reset(self) -> None:
        """Drop every pending operation from the count and hide the indicator."""
        self._count = 0
        self._indicator.hide()
