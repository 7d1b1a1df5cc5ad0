"""Rich-based busy indicator display."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.status import Status

from placemap.activity import ActivityKind, BusyIndicator


class RichBusyIndicator(BusyIndicator):
    """Terminal spinner powered by Rich.

    Use as a context manager so a spinner left running by an interrupted
    operation is always stopped::

        with RichBusyIndicator() as indicator:
            store = PlaceStore(backend, cache, activity=ActivityTracker(indicator))
            await store.fetch_all()
    """

    _KIND_STYLES: ClassVar[dict[ActivityKind, str]] = {
        ActivityKind.PLACES: "cyan",
        ActivityKind.SAVE: "green",
        ActivityKind.DELETE: "red",
        ActivityKind.UPDATE: "blue",
        ActivityKind.VISIT: "green",
        ActivityKind.PLAN: "blue",
        ActivityKind.GEOCODE: "magenta",
        ActivityKind.REVERSE_GEOCODE: "magenta",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._status: Status | None = None

    # -- context manager --------------------------------------------------

    def __enter__(self) -> RichBusyIndicator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.hide()

    # -- BusyIndicator implementation -------------------------------------

    def show(self, kind: ActivityKind, message: str) -> None:
        style = self._KIND_STYLES.get(kind, "white")
        text = f"[{style}]{message}[/]"
        if self._status is not None:
            self._status.update(text)
            return
        self._status = self._console.status(text)
        self._status.start()

    def hide(self) -> None:
        if self._status is None:
            return
        self._status.stop()
        self._status = None
