"""Abstract base class for places backends.

Every concrete backend (HTTP, in-memory, ...) implements this interface so the
:class:`~placemap.store.store.PlaceStore` can synchronize without knowing
*which* system it talks to.

All methods are ``async``. Backends are async context managers: transports are
opened in ``__aenter__`` and released in ``__aexit__``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from types import TracebackType

from placemap.models.place import Place, PlaceDraft, PlaceUpdate


class PlaceBackend(ABC):
    """Abstract remote store for the place collection."""

    @abstractmethod
    async def __aenter__(self) -> PlaceBackend: ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    async def list_places(self) -> list[Place]:
        """Fetch the full collection.

        Raises:
            BackendError: If the request fails or the backend rejects it.
        """

    @abstractmethod
    async def create_place(self, draft: PlaceDraft) -> Place:
        """Persist *draft* and return the canonical record with its backend id.

        Raises:
            BackendError: If the creation fails.
        """

    @abstractmethod
    async def update_place(self, place_id: str, update: PlaceUpdate) -> Place:
        """Apply a partial update to the place identified by *place_id*.

        Raises:
            BackendError: If the update fails.
        """

    @abstractmethod
    async def mark_visited(self, place_id: str, *, visit_date: date, visit_description: str) -> Place:
        """Move a place to ``visited``, clearing its planned date.

        Raises:
            BackendError: If the transition fails.
        """

    @abstractmethod
    async def mark_planned(self, place_id: str, *, planned_date: date) -> Place:
        """Move a place to ``planned``, clearing its visit fields.

        Raises:
            BackendError: If the transition fails.
        """

    @abstractmethod
    async def delete_place(self, place_id: str) -> None:
        """Delete the place identified by *place_id*.

        Raises:
            BackendError: If the deletion fails.
        """
