"""Description templates keyed by directory category."""

from __future__ import annotations

from placemap.models.enums import PlaceCategory


def suggest_description(name: str, category: PlaceCategory | None) -> str:
    """Template sentence describing *name*, chosen by its category tag."""
    match category:
        case PlaceCategory.BEACH:
            return f"{name} is known for its beaches, warm water and sunny days by the sea."
        case PlaceCategory.MOUNTAIN:
            return f"{name} offers mountain scenery, fresh air and trails with sweeping views."
        case PlaceCategory.HISTORIC:
            return f"{name} preserves centuries of history in its streets, buildings and monuments."
        case PlaceCategory.CULTURAL:
            return f"{name} is a cultural hub with museums, music, food and local traditions."
        case PlaceCategory.NATURE:
            return f"{name} is surrounded by nature, with wildlife, rivers and protected landscapes."
        case PlaceCategory.CITY:
            return f"{name} is a lively city with neighborhoods, restaurants and attractions to explore."
        case _:
            return f"{name} is a place worth discovering."
