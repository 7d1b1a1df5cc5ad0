"""Tests for marker and popup rendering."""

from __future__ import annotations

from datetime import date

from placemap.mapview import (
    PLANNED_ICON,
    PLANNED_ROUTE_STYLE,
    VISITED_ICON,
    VISITED_ROUTE_STYLE,
    build_marker,
    format_popup_date,
    icon_for_status,
    render_popup,
    route_style_for_status,
)
from placemap.models import PlaceStatus
from tests.fakes.places import make_place


def test_icons_and_route_styles_follow_status() -> None:
    assert icon_for_status(PlaceStatus.VISITED) is VISITED_ICON
    assert icon_for_status(PlaceStatus.PLANNED) is PLANNED_ICON
    assert route_style_for_status(PlaceStatus.VISITED) is VISITED_ROUTE_STYLE
    assert route_style_for_status(PlaceStatus.PLANNED) is PLANNED_ROUTE_STYLE
    assert PLANNED_ROUTE_STYLE.dash_array is not None
    assert VISITED_ROUTE_STYLE.dash_array is None


def test_format_popup_date() -> None:
    assert format_popup_date(date(2023, 12, 15)) == "15/12/2023"
    assert format_popup_date(date(2023, 12, 15), "%Y-%m-%d") == "2023-12-15"


class TestRenderPopup:
    def test_visited_popup(self) -> None:
        place = make_place(
            "Gramado",
            status=PlaceStatus.VISITED,
            visit_date=date(2023, 12, 15),
            visit_description="Cold & lovely",
        )
        html = render_popup(place)
        assert "<b>Gramado</b>" in html
        assert "✅ Visited" in html
        assert "Cold &amp; lovely" in html
        assert "Visited on 15/12/2023" in html

    def test_planned_popup_uses_planned_date(self) -> None:
        html = render_popup(make_place("Natal", planned_date=date(2024, 6, 1)))
        assert "📋 Planned" in html
        assert "Planned for 01/06/2024" in html

    def test_escapes_name_and_includes_image(self) -> None:
        place = make_place("<script>", image="https://img.test/a.jpg?x=1&y=2")
        html = render_popup(place)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert 'src="https://img.test/a.jpg?x=1&amp;y=2"' in html


def test_build_marker_uses_place_key() -> None:
    marker = build_marker(make_place(backend_id="p-9", coordinates=(1.0, 2.0)))
    assert marker.place_key == "p-9"
    assert marker.coordinates == (1.0, 2.0)
    assert marker.icon is PLANNED_ICON
