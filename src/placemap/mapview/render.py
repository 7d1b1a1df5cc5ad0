"""Marker icons, route styles and popup markup per place status."""

from __future__ import annotations

from datetime import date
from html import escape
from typing import assert_never

from placemap.identity import place_key
from placemap.models.enums import PlaceStatus
from placemap.models.map import Marker, MarkerIcon, RouteStyle
from placemap.models.place import Place

VISITED_ICON = MarkerIcon(name="visited", color="#ef4444", symbol="🔴", label="✅ Visited")
PLANNED_ICON = MarkerIcon(name="planned", color="#3b82f6", symbol="🔵", label="📋 Planned")

VISITED_ROUTE_STYLE = RouteStyle(color="#ef4444", weight=3, opacity=0.7)
PLANNED_ROUTE_STYLE = RouteStyle(color="#3b82f6", weight=3, opacity=0.6, dash_array="8 8")


def icon_for_status(status: PlaceStatus) -> MarkerIcon:
    match status:
        case PlaceStatus.VISITED:
            return VISITED_ICON
        case PlaceStatus.PLANNED:
            return PLANNED_ICON
        case _:
            assert_never(status)


def route_style_for_status(status: PlaceStatus) -> RouteStyle:
    match status:
        case PlaceStatus.VISITED:
            return VISITED_ROUTE_STYLE
        case PlaceStatus.PLANNED:
            return PLANNED_ROUTE_STYLE
        case _:
            assert_never(status)


def format_popup_date(value: date, date_format: str = "%d/%m/%Y") -> str:
    """Format a calendar date from its own year/month/day; no timezone is involved."""
    return date(value.year, value.month, value.day).strftime(date_format)


def _date_line(place: Place, date_format: str) -> str | None:
    when = place.relevant_date
    if when is None:
        return None
    prefix = "Visited on" if place.status is PlaceStatus.VISITED else "Planned for"
    return f"{prefix} {format_popup_date(when, date_format)}"


def render_popup(place: Place, *, date_format: str = "%d/%m/%Y") -> str:
    """HTML popup: name, status, narrative and the date relevant to the status."""
    icon = icon_for_status(place.status)
    lines = [
        f"<b>{escape(place.name)}</b>",
        f'<span style="color: {icon.color};">{escape(icon.label)}</span>',
    ]
    if place.narrative:
        lines.append(escape(place.narrative))
    date_line = _date_line(place, date_format)
    if date_line:
        lines.append(f"<small>{escape(date_line)}</small>")
    body = "<br>".join(lines)
    if place.image:
        body += (
            f'<br><img src="{escape(place.image, quote=True)}" alt="{escape(place.name, quote=True)}" '
            'style="width:120px;border-radius:8px;margin-top:8px;">'
        )
    return f'<div style="text-align: center;">{body}</div>'


def build_marker(place: Place, *, date_format: str = "%d/%m/%Y") -> Marker:
    return Marker(
        place_key=place_key(place),
        coordinates=place.coordinates,
        icon=icon_for_status(place.status),
        popup_html=render_popup(place, date_format=date_format),
    )
