"""Bundled place directory entries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from placemap.models.enums import PlaceCategory
from placemap.models.place import Coordinates


class PlaceDirectoryEntry(BaseModel):
    """Read-only seed record used for offline-first search suggestions."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    state: str | None = None
    category: PlaceCategory | None = None
    coordinates: Coordinates

    @property
    def label(self) -> str:
        parts = [self.name, self.state, self.country]
        return ", ".join(part for part in parts if part)
