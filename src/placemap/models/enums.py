"""Enumerated types used across placemap."""

from __future__ import annotations

from enum import StrEnum


class PlaceStatus(StrEnum):
    """Life-phase of a place."""

    PLANNED = "planned"
    VISITED = "visited"


class PlaceCategory(StrEnum):
    """Category tag carried by bundled directory entries."""

    BEACH = "beach"
    MOUNTAIN = "mountain"
    HISTORIC = "historic"
    CULTURAL = "cultural"
    NATURE = "nature"
    CITY = "city"
