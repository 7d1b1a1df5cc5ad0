"""Value types describing what the map surface draws."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from placemap.models.enums import PlaceStatus
from placemap.models.place import Coordinates


class MarkerIcon(BaseModel):
    """One of the fixed marker icon variants."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: str
    symbol: str
    label: str


class RouteStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: str
    weight: int = 3
    opacity: float = 0.7
    dash_array: str | None = None


class Marker(BaseModel):
    """A marker to draw for one place."""

    model_config = ConfigDict(frozen=True)

    place_key: str
    coordinates: Coordinates
    icon: MarkerIcon
    popup_html: str


class Route(BaseModel):
    """A polyline through the places of one status, in collection order."""

    model_config = ConfigDict(frozen=True)

    status: PlaceStatus
    points: tuple[Coordinates, ...]
    style: RouteStyle


class Bounds(BaseModel):
    """Axis-aligned lat/lon bounding box."""

    model_config = ConfigDict(frozen=True)

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, points: Iterable[Coordinates]) -> Bounds:
        """Smallest box containing every point.

        Raises:
            ValueError: If *points* is empty.
        """
        pts = list(points)
        if not pts:
            raise ValueError("cannot bound an empty point set")
        lats = [lat for lat, _ in pts]
        lons = [lon for _, lon in pts]
        return cls(south=min(lats), west=min(lons), north=max(lats), east=max(lons))

    def pad(self, ratio: float) -> Bounds:
        """Grow the box by *ratio* of its height/width on every side."""
        lat_buffer = (self.north - self.south) * ratio
        lon_buffer = (self.east - self.west) * ratio
        return Bounds(
            south=max(-90.0, self.south - lat_buffer),
            west=max(-180.0, self.west - lon_buffer),
            north=min(90.0, self.north + lat_buffer),
            east=min(180.0, self.east + lon_buffer),
        )
