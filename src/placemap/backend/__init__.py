"""Places backend adapters."""

from placemap.backend.base import PlaceBackend
from placemap.backend.http import HttpPlaceBackend
from placemap.backend.memory import InMemoryPlaceBackend

__all__ = ["HttpPlaceBackend", "InMemoryPlaceBackend", "PlaceBackend"]
