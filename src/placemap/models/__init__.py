"""Domain models for placemap.

Re-exports all public model classes for convenient access::

    from placemap.models import Place, PlaceDraft, PlaceStatus
"""

from placemap.models.directory import PlaceDirectoryEntry
from placemap.models.enums import PlaceCategory, PlaceStatus
from placemap.models.map import Bounds, Marker, MarkerIcon, Route, RouteStyle
from placemap.models.place import (
    DEFAULT_CENTER,
    CalendarDate,
    Coordinates,
    Place,
    PlaceDraft,
    PlaceStats,
    PlaceUpdate,
    format_calendar_date,
    parse_calendar_date,
)

__all__ = [
    "DEFAULT_CENTER",
    "Bounds",
    "CalendarDate",
    "Coordinates",
    "Marker",
    "MarkerIcon",
    "Place",
    "PlaceCategory",
    "PlaceDirectoryEntry",
    "PlaceDraft",
    "PlaceStats",
    "PlaceStatus",
    "PlaceUpdate",
    "Route",
    "RouteStyle",
    "format_calendar_date",
    "parse_calendar_date",
]
