"""Place identity resolution.

A place may be known by its backend id (``_id``) or, for data migrated from
the fallback cache, by a legacy local id (``id``). Every lookup in the
codebase goes through :func:`matches_identity` so both forms are honored in
one place.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Collection, Iterable, Sequence

from placemap.models.place import Place


def matches_identity(place: Place, place_id: str) -> bool:
    """Return whether *place_id* is the backend id or the legacy local id of *place*."""
    if not place_id:
        return False
    return place_id == place.backend_id or place_id == place.local_id


def index_of(places: Sequence[Place], place_id: str) -> int | None:
    for index, place in enumerate(places):
        if matches_identity(place, place_id):
            return index
    return None


def find_place(places: Iterable[Place], place_id: str) -> Place | None:
    return next((place for place in places if matches_identity(place, place_id)), None)


def place_key(place: Place) -> str:
    """Stable key for a place, used to address its marker on the map.

    Places without any identity fall back to name and coordinates.
    """
    identity = place.identity
    if identity:
        return identity
    lat, lon = place.coordinates
    return f"{place.name}@{lat:.6f},{lon:.6f}"


def _default_local_id() -> str:
    return f"local-{uuid.uuid4().hex[:12]}"


def generate_local_id(existing: Collection[str], *, factory: Callable[[], str] = _default_local_id) -> str:
    """Produce a local id not present in *existing*, regenerating on collision."""
    candidate = factory()
    while candidate in existing:
        candidate = factory()
    return candidate


def assign_local_ids(places: Sequence[Place], *, factory: Callable[[], str] = _default_local_id) -> list[Place]:
    """Give every place lacking both ids a collision-checked local id."""
    taken = {identity for place in places for identity in (place.backend_id, place.local_id) if identity}
    out: list[Place] = []
    for place in places:
        if place.identity:
            out.append(place)
            continue
        local_id = generate_local_id(taken, factory=factory)
        taken.add(local_id)
        out.append(place.model_copy(update={"local_id": local_id}))
    return out
