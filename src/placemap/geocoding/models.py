"""Pydantic models for geocoding results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from placemap.models.directory import PlaceDirectoryEntry
from placemap.models.place import Coordinates


class GeocodeHit(BaseModel):
    """First result of a forward search against an external provider."""

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    display_name: str | None = None


class ReverseAddress(BaseModel):
    """Structured address returned by a reverse lookup."""

    model_config = ConfigDict(frozen=True)

    city: str | None = None
    town: str | None = None
    village: str | None = None
    state: str | None = None
    country: str | None = None


class ResolvedLocation(BaseModel):
    """A name and coordinate pair ready to be attached to a place."""

    model_config = ConfigDict(frozen=True)

    name: str
    coordinates: Coordinates
    source: Literal["directory", "provider"]
    entry: PlaceDirectoryEntry | None = None

    @classmethod
    def from_entry(cls, entry: PlaceDirectoryEntry) -> ResolvedLocation:
        return cls(name=entry.name, coordinates=entry.coordinates, source="directory", entry=entry)
