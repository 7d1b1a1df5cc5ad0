"""Reactive place store."""

from placemap.store.store import PlaceCollection, PlaceStore
from placemap.store.stream import StateStream, Subscription

__all__ = ["PlaceCollection", "PlaceStore", "StateStream", "Subscription"]
