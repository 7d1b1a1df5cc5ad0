"""The place store: single observable source of truth for the collection.

The store reconciles three tiers: the remote backend (authoritative), the
durable fallback cache (read-only recovery when the backend is unreachable),
and the in-memory collection published through a :class:`StateStream`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from placemap.activity import ActivityKind, ActivityTracker
from placemap.backend.base import PlaceBackend
from placemap.exceptions import BackendError, FallbackCacheError
from placemap.identity import find_place, index_of, matches_identity
from placemap.models.enums import PlaceStatus
from placemap.models.place import Place, PlaceDraft, PlaceStats, PlaceUpdate
from placemap.persistence.fallback_cache import FallbackCache
from placemap.store.stream import Listener, StateStream, Subscription

logger = logging.getLogger(__name__)

PlaceCollection = tuple[Place, ...]

_DRAFT_EXCLUDE = {"backend_id", "local_id", "created_at", "updated_at"}


class PlaceStore:
    """Owns the place collection and every write against it.

    Writes are remote-first: the in-memory collection only changes after the
    backend confirms, and the stream only ever publishes completed states.
    Every write failure propagates to the caller; only :meth:`fetch_all`
    degrades, first to the fallback cache and then to an empty collection.

    Args:
        backend: Remote backend, already entered.
        cache: Durable fallback cache.
        activity: Tracker counting in-flight remote calls and cache reads.
        today: Clock returning the current local calendar date.
    """

    def __init__(
        self,
        backend: PlaceBackend,
        cache: FallbackCache,
        *,
        activity: ActivityTracker | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._backend = backend
        self._cache = cache
        self._activity = activity or ActivityTracker()
        self._today = today
        self._stream: StateStream[PlaceCollection] = StateStream(())

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def places(self) -> PlaceCollection:
        return self._stream.value

    @property
    def in_flight(self) -> int:
        return self._activity.in_flight

    @property
    def visited_places(self) -> list[Place]:
        return [place for place in self.places if place.status is PlaceStatus.VISITED]

    @property
    def planned_places(self) -> list[Place]:
        return [place for place in self.places if place.status is PlaceStatus.PLANNED]

    def subscribe(self, listener: Listener[PlaceCollection]) -> Subscription[PlaceCollection]:
        """Register *listener*; it is called at once with the current collection."""
        return self._stream.subscribe(listener)

    def get(self, place_id: str) -> Place | None:
        return find_place(self.places, place_id)

    def stats(self) -> PlaceStats:
        total = len(self.places)
        visited = len(self.visited_places)
        planned = len(self.planned_places)
        percentage = round(visited / total * 100) if total else 0
        return PlaceStats(total=total, visited=visited, planned=planned, percentage=percentage)

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    async def fetch_all(self) -> PlaceCollection:
        """Replace the collection with the backend's, degrading to the fallback cache.

        Never raises for backend or cache failures; they are logged and the
        collection becomes whatever could be recovered (possibly empty).
        """
        try:
            async with self._activity.track(ActivityKind.PLACES):
                places = await self._backend.list_places()
        except BackendError as exc:
            logger.warning("Failed to load places from backend, using fallback cache: %s", exc)
            places = await self._read_fallback()
        else:
            logger.info("Loaded %d place(s) from backend", len(places))

        self._stream.emit(tuple(places))
        return self.places

    async def _read_fallback(self) -> list[Place]:
        try:
            async with self._activity.track(ActivityKind.PLACES):
                places = await self._cache.read()
        except FallbackCacheError as exc:
            logger.error("Fallback cache unreadable, continuing with no places: %s", exc)
            return []
        if places:
            logger.info("Using %d place(s) from fallback cache %s", len(places), self._cache.path)
        return places

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, draft: PlaceDraft) -> Place:
        """Persist *draft* and append the backend's canonical record.

        Raises:
            BackendError: If the backend call fails; nothing is kept locally.
        """
        async with self._activity.track(ActivityKind.SAVE):
            place = await self._backend.create_place(draft)
        self._stream.emit((*self.places, place))
        return place

    async def update(self, place_id: str, update: PlaceUpdate) -> Place:
        """Send a partial update and replace the matching record.

        Raises:
            BackendError: If the backend call fails; the collection is unchanged.
        """
        async with self._activity.track(ActivityKind.UPDATE):
            place = await self._backend.update_place(place_id, update)
        self._replace(place_id, place)
        return place

    async def delete(self, place_id: str) -> None:
        """Delete remotely, then drop the matching record.

        Raises:
            BackendError: If the backend call fails; the record is retained.
        """
        async with self._activity.track(ActivityKind.DELETE):
            await self._backend.delete_place(place_id)
        remaining = tuple(place for place in self.places if not matches_identity(place, place_id))
        self._stream.emit(remaining)

    async def transition_to_visited(self, place_id: str, visit_description: str) -> Place:
        """Mark a place visited today (local date), clearing its planned date."""
        async with self._activity.track(ActivityKind.VISIT):
            place = await self._backend.mark_visited(
                place_id,
                visit_date=self._today(),
                visit_description=visit_description,
            )
        self._replace(place_id, place)
        return place

    async def transition_to_planned(self, place_id: str) -> Place:
        """Mark a place planned for today (local date), clearing its visit fields."""
        async with self._activity.track(ActivityKind.PLAN):
            place = await self._backend.mark_planned(place_id, planned_date=self._today())
        self._replace(place_id, place)
        return place

    async def update_description(self, place_id: str, description: str, *, visited: bool = False) -> Place:
        """Edit the visit narrative (*visited*) or the base description."""
        update = PlaceUpdate(visit_description=description) if visited else PlaceUpdate(description=description)
        return await self.update(place_id, update)

    async def migrate_fallback_cache(self) -> list[Place]:
        """Create every cached place on the backend, then clear the cache.

        Local ids are dropped so the backend assigns canonical ones. The cache
        is cleared only when every creation succeeded.

        Raises:
            FallbackCacheError: If the cache cannot be read or cleared.
            BackendError: If any creation fails; the cache is left intact.
        """
        cached = await self._cache.read()
        if not cached:
            return []

        created: list[Place] = []
        for place in cached:
            draft = PlaceDraft.model_validate(place.model_dump(exclude=_DRAFT_EXCLUDE))
            created.append(await self.create(draft))

        await self._cache.clear()
        logger.info("Migrated %d place(s) from fallback cache", len(created))
        return created

    def _replace(self, place_id: str, place: Place) -> None:
        current = list(self.places)
        index = index_of(current, place_id)
        if index is None:
            logger.debug("Updated place %s is not in the local collection", place_id)
            return
        current[index] = place
        self._stream.emit(tuple(current))
