"""In-memory map surface with GeoJSON export."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import Any

from placemap.mapview.surface import ClickHandler, MapSurface
from placemap.models.map import Bounds, Marker, Route
from placemap.models.place import DEFAULT_CENTER, Coordinates


class SceneMapSurface(MapSurface):
    """Surface that keeps the drawn scene as plain data.

    Used headless (CLI export, tests) and as the reference behavior for real
    surfaces.
    """

    def __init__(self, *, center: Coordinates = DEFAULT_CENTER, zoom: int = 5) -> None:
        self.markers: dict[str, Marker] = {}
        self.routes: dict[str, Route] = {}
        self.center: Coordinates = center
        self.zoom = zoom
        self.bounds: Bounds | None = None
        self.open_popup_key: str | None = None
        self._route_ids = itertools.count(1)
        self._click_handlers: list[ClickHandler] = []

    def add_marker(self, marker: Marker) -> None:
        self.markers[marker.place_key] = marker

    def remove_marker(self, place_key: str) -> None:
        self.markers.pop(place_key, None)
        if self.open_popup_key == place_key:
            self.open_popup_key = None

    def add_route(self, route: Route) -> str:
        route_id = f"route-{next(self._route_ids)}"
        self.routes[route_id] = route
        return route_id

    def remove_route(self, route_id: str) -> None:
        self.routes.pop(route_id, None)

    def fit_bounds(self, bounds: Bounds) -> None:
        self.bounds = bounds
        self.center = ((bounds.south + bounds.north) / 2, (bounds.west + bounds.east) / 2)

    def set_view(self, center: Coordinates, zoom: int, *, animate: bool = False, duration: float = 0.0) -> None:
        self.center = center
        self.zoom = zoom

    def open_popup(self, place_key: str) -> None:
        if place_key in self.markers:
            self.open_popup_key = place_key

    def close_popup(self) -> None:
        self.open_popup_key = None

    def on_click(self, handler: ClickHandler) -> Callable[[], None]:
        self._click_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._click_handlers:
                self._click_handlers.remove(handler)

        return unsubscribe

    def click(self, latitude: float, longitude: float) -> None:
        """Deliver a click at the given point to every registered handler."""
        for handler in list(self._click_handlers):
            handler(latitude, longitude)

    def to_geojson(self) -> dict[str, Any]:
        """FeatureCollection with one Point per marker and one LineString per route.

        GeoJSON positions are ``[longitude, latitude]``.
        """
        features: list[dict[str, Any]] = []
        for marker in self.markers.values():
            lat, lon = marker.coordinates
            features.append(
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": [lon, lat]},
                    "properties": {
                        "key": marker.place_key,
                        "icon": marker.icon.name,
                        "marker-color": marker.icon.color,
                        "popup": marker.popup_html,
                    },
                }
            )
        for route_id, route in self.routes.items():
            features.append(
                {
                    "type": "Feature",
                    "geometry": {"type": "LineString", "coordinates": [[lon, lat] for lat, lon in route.points]},
                    "properties": {
                        "id": route_id,
                        "status": route.status.value,
                        "stroke": route.style.color,
                        "stroke-width": route.style.weight,
                        "stroke-opacity": route.style.opacity,
                    },
                }
            )
        return {"type": "FeatureCollection", "features": features}
