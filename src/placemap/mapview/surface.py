"""Abstract map surface the reconciler draws on.

A surface is whatever renders tiles and overlays (a browser map, a native
widget, an in-memory scene). It accepts marker/route/viewport/popup commands
and reports click events.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from placemap.models.map import Bounds, Marker, Route
from placemap.models.place import Coordinates

ClickHandler = Callable[[float, float], None]


class MapSurface(ABC):
    """Commands understood by a map surface."""

    @abstractmethod
    def add_marker(self, marker: Marker) -> None:
        """Draw *marker*, addressed afterwards by ``marker.place_key``."""

    @abstractmethod
    def remove_marker(self, place_key: str) -> None:
        """Remove the marker for *place_key*; unknown keys are ignored."""

    @abstractmethod
    def add_route(self, route: Route) -> str:
        """Draw *route* and return an id used to remove it."""

    @abstractmethod
    def remove_route(self, route_id: str) -> None:
        """Remove a route previously returned by :meth:`add_route`."""

    @abstractmethod
    def fit_bounds(self, bounds: Bounds) -> None:
        """Move the viewport so *bounds* is fully visible."""

    @abstractmethod
    def set_view(self, center: Coordinates, zoom: int, *, animate: bool = False, duration: float = 0.0) -> None:
        """Pan/zoom the viewport, optionally animated over *duration* seconds."""

    @abstractmethod
    def open_popup(self, place_key: str) -> None:
        """Open the popup bound to the marker for *place_key*."""

    @abstractmethod
    def close_popup(self) -> None:
        """Close whichever popup is open."""

    @abstractmethod
    def on_click(self, handler: ClickHandler) -> Callable[[], None]:
        """Register a click handler; returns a callable that unregisters it."""

    def once_move_end(self, callback: Callable[[], None]) -> bool:
        """Run *callback* once the current camera animation ends.

        Surfaces without an animation-end notification return *False* and
        callers fall back to a fixed delay.
        """
        return False
