"""Tests for the in-memory scene surface."""

from __future__ import annotations

from placemap.mapview import PLANNED_ROUTE_STYLE, SceneMapSurface, build_marker
from placemap.models import Bounds, PlaceStatus, Route
from tests.fakes.places import make_place


def test_popup_only_opens_for_existing_marker() -> None:
    surface = SceneMapSurface()
    surface.open_popup("missing")
    assert surface.open_popup_key is None

    surface.add_marker(build_marker(make_place(backend_id="p-1")))
    surface.open_popup("p-1")
    assert surface.open_popup_key == "p-1"

    surface.remove_marker("p-1")
    assert surface.open_popup_key is None


def test_fit_bounds_recenters() -> None:
    surface = SceneMapSurface()
    surface.fit_bounds(Bounds(south=-10.0, west=-50.0, north=0.0, east=-40.0))
    assert surface.center == (-5.0, -45.0)


def test_click_handlers_and_unsubscribe() -> None:
    surface = SceneMapSurface()
    clicks: list[tuple[float, float]] = []
    unsubscribe = surface.on_click(lambda lat, lon: clicks.append((lat, lon)))

    surface.click(1.0, 2.0)
    unsubscribe()
    surface.click(3.0, 4.0)

    assert clicks == [(1.0, 2.0)]


def test_surface_without_move_end_support() -> None:
    assert SceneMapSurface().once_move_end(lambda: None) is False


def test_geojson_uses_lon_lat_order() -> None:
    surface = SceneMapSurface()
    surface.add_marker(build_marker(make_place(backend_id="p-1", coordinates=(-5.0, -35.0))))
    route_id = surface.add_route(
        Route(status=PlaceStatus.PLANNED, points=((-5.0, -35.0), (-8.0, -34.9)), style=PLANNED_ROUTE_STYLE)
    )

    geojson = surface.to_geojson()

    assert geojson["type"] == "FeatureCollection"
    point, line = geojson["features"]
    assert point["geometry"] == {"type": "Point", "coordinates": [-35.0, -5.0]}
    assert point["properties"]["key"] == "p-1"
    assert line["geometry"]["coordinates"] == [[-35.0, -5.0], [-34.9, -8.0]]
    assert line["properties"]["id"] == route_id == "route-1"
    assert line["properties"]["status"] == "planned"
