"""Keeps a map surface in step with the place collection."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from placemap.config import PlaceMapConfig
from placemap.identity import find_place, place_key
from placemap.mapview.render import build_marker, route_style_for_status
from placemap.mapview.scheduler import AsyncioScheduler, ScheduledCall, Scheduler
from placemap.mapview.surface import MapSurface
from placemap.models.enums import PlaceStatus
from placemap.models.map import Bounds, Marker, Route
from placemap.models.place import Place
from placemap.store.store import PlaceStore
from placemap.store.stream import Subscription

logger = logging.getLogger(__name__)

_ROUTE_ORDER = (PlaceStatus.VISITED, PlaceStatus.PLANNED)


class MapReconciler:
    """Redraws markers and routes on every collection change.

    Reconciliation tears down everything it drew before and draws the new
    collection from scratch, so running it twice on the same collection
    leaves the same markers and routes on the surface.

    Args:
        surface: Surface to draw on.
        scheduler: Delay source for the camera-then-popup sequence; defaults to an
            :class:`AsyncioScheduler`, which needs a running event loop.
        focus_zoom: Zoom used by :meth:`focus_on_place`.
        fit_padding: Ratio added around the bounds of all markers.
        pan_duration: Duration of the animated pan, in seconds.
        popup_delay: Delay before the focused popup opens; must exceed *pan_duration*.
        date_format: strftime pattern for popup dates.
    """

    def __init__(
        self,
        surface: MapSurface,
        *,
        scheduler: Scheduler | None = None,
        focus_zoom: int = 10,
        fit_padding: float = 0.1,
        pan_duration: float = 0.5,
        popup_delay: float = 0.6,
        date_format: str = "%d/%m/%Y",
    ) -> None:
        if popup_delay <= pan_duration:
            raise ValueError("popup_delay must be greater than pan_duration")
        self._surface = surface
        self._scheduler = scheduler or AsyncioScheduler()
        self._focus_zoom = focus_zoom
        self._fit_padding = fit_padding
        self._pan_duration = pan_duration
        self._popup_delay = popup_delay
        self._date_format = date_format

        self._places: tuple[Place, ...] = ()
        self._markers: dict[str, Marker] = {}
        self._route_ids: list[str] = []
        self._pending_popup: ScheduledCall | None = None
        self._focus_generation = 0
        self._subscription: Subscription[tuple[Place, ...]] | None = None

    @classmethod
    def from_config(
        cls,
        surface: MapSurface,
        config: PlaceMapConfig,
        *,
        scheduler: Scheduler | None = None,
    ) -> MapReconciler:
        return cls(
            surface,
            scheduler=scheduler,
            focus_zoom=config.focus_zoom,
            fit_padding=config.fit_padding,
            pan_duration=config.pan_duration,
            popup_delay=config.popup_delay,
            date_format=config.date_format,
        )

    @property
    def rendered_keys(self) -> list[str]:
        return list(self._markers)

    @property
    def route_count(self) -> int:
        return len(self._route_ids)

    # ------------------------------------------------------------------
    # Store wiring
    # ------------------------------------------------------------------

    def attach(self, store: PlaceStore) -> None:
        """Subscribe to *store*; the current collection is drawn immediately."""
        self.detach()
        self._subscription = store.subscribe(self.reconcile)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._cancel_pending_popup()

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def reconcile(self, places: Sequence[Place]) -> None:
        self._teardown()
        self._places = tuple(places)

        for place in self._places:
            marker = build_marker(place, date_format=self._date_format)
            if marker.place_key in self._markers:
                logger.warning("Skipping duplicate marker for %s", marker.place_key)
                continue
            self._surface.add_marker(marker)
            self._markers[marker.place_key] = marker

        for status in _ROUTE_ORDER:
            points = tuple(place.coordinates for place in self._places if place.status is status)
            if len(points) < 2:
                continue
            route = Route(status=status, points=points, style=route_style_for_status(status))
            self._route_ids.append(self._surface.add_route(route))

        if self._markers:
            bounds = Bounds.around(marker.coordinates for marker in self._markers.values())
            self._surface.fit_bounds(bounds.pad(self._fit_padding))

        logger.debug("reconciled %d marker(s), %d route(s)", len(self._markers), len(self._route_ids))

    def _teardown(self) -> None:
        for key in self._markers:
            self._surface.remove_marker(key)
        self._markers = {}
        for route_id in self._route_ids:
            self._surface.remove_route(route_id)
        self._route_ids = []

    # ------------------------------------------------------------------
    # Camera focus
    # ------------------------------------------------------------------

    def focus_on_place(self, place_id: str) -> bool:
        """Pan to a place, then open its popup once the camera has settled.

        The popup opens on the surface's animation-end notification when it
        has one, otherwise after the fixed popup delay. Returns *False* when
        no rendered place matches *place_id*.
        """
        place = find_place(self._places, place_id)
        if place is None:
            logger.warning("Cannot focus unknown place %s", place_id)
            return False

        key = place_key(place)
        self._cancel_pending_popup()
        self._focus_generation += 1
        generation = self._focus_generation

        def open_popup() -> None:
            self._pending_popup = None
            if generation != self._focus_generation:
                return
            if key not in self._markers:
                logger.debug("Marker %s disappeared before its popup opened", key)
                return
            self._surface.open_popup(key)

        # Armed before the camera moves: a scheduler failure leaves the view as it was.
        if not self._surface.once_move_end(open_popup):
            self._pending_popup = self._scheduler.call_later(self._popup_delay, open_popup)
        self._surface.close_popup()
        self._surface.set_view(place.coordinates, self._focus_zoom, animate=True, duration=self._pan_duration)
        return True

    def _cancel_pending_popup(self) -> None:
        if self._pending_popup is not None:
            self._pending_popup.cancel()
            self._pending_popup = None
