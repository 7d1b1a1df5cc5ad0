"""Durable fallback cache for the place collection.

The cache is a single named slot: one JSON file holding the serialized
collection. It is legacy data read when the backend is unreachable; normal
writes never mirror into it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from placemap.exceptions import FallbackCacheError
from placemap.identity import assign_local_ids
from placemap.models.place import Place

logger = logging.getLogger(__name__)

_PLACES_ADAPTER = TypeAdapter(list[Place])


class FallbackCache:
    """JSON-file slot holding a serialized place collection.

    Args:
        path: File backing the slot.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    async def read(self) -> list[Place]:
        """Load the cached collection.

        A missing slot reads as an empty collection. Entries without any
        identity receive a collision-checked local id.

        Raises:
            FallbackCacheError: If the slot exists but cannot be read or parsed.
        """
        return await asyncio.to_thread(self._read_sync)

    async def write(self, places: list[Place]) -> None:
        """Replace the slot content with *places*.

        Raises:
            FallbackCacheError: If the file cannot be written.
        """
        await asyncio.to_thread(self._write_sync, places)

    async def clear(self) -> None:
        """Remove the slot. Clearing an absent slot is a no-op."""
        await asyncio.to_thread(self._clear_sync)

    # ------------------------------------------------------------------
    # Blocking helpers, run off the event loop
    # ------------------------------------------------------------------

    def _read_sync(self) -> list[Place]:
        if not self._path.exists():
            return []
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise FallbackCacheError(f"failed reading fallback cache: {self._path}") from exc
        if not raw.strip():
            return []
        try:
            payload: Any = json.loads(raw)
            places = _PLACES_ADAPTER.validate_python(payload)
        except (json.JSONDecodeError, ValidationError) as exc:
            raise FallbackCacheError(f"invalid fallback cache file: {self._path}") from exc
        logger.debug("read %d place(s) from fallback cache %s", len(places), self._path)
        return assign_local_ids(places)

    def _write_sync(self, places: list[Place]) -> None:
        payload = [place.to_payload() for place in places]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise FallbackCacheError(f"failed to write fallback cache: {self._path}") from exc

    def _clear_sync(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise FallbackCacheError(f"failed to clear fallback cache: {self._path}") from exc
