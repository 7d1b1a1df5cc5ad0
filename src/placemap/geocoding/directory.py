"""Bundled place directory used for offline-first suggestions."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from functools import lru_cache
from importlib import resources

from pydantic import TypeAdapter

from placemap.geocoding.normalize import normalize_text
from placemap.models.directory import PlaceDirectoryEntry

logger = logging.getLogger(__name__)

_ENTRIES_ADAPTER = TypeAdapter(list[PlaceDirectoryEntry])


class PlaceDirectory:
    """Immutable list of known locations with a pre-normalized search index."""

    def __init__(self, entries: Sequence[PlaceDirectoryEntry]) -> None:
        self._entries = tuple(entries)
        self._index = tuple(
            (entry, normalize_text(entry.name), tuple(normalize_text(field) for field in _fields(entry)))
            for entry in self._entries
        )

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[PlaceDirectoryEntry, ...]:
        return self._entries

    def suggest(self, query: str, *, limit: int = 10) -> list[PlaceDirectoryEntry]:
        """Entries whose name, country or state contains the query or is contained in it.

        Results keep directory order; there is no relevance scoring.
        """
        normalized = normalize_text(query)
        if not normalized:
            return []
        matches: list[PlaceDirectoryEntry] = []
        for entry, _, fields in self._index:
            if any(normalized in field or field in normalized for field in fields):
                matches.append(entry)
                if len(matches) >= limit:
                    break
        return matches

    def find_exact(self, query: str) -> PlaceDirectoryEntry | None:
        """First entry whose normalized name equals the normalized query."""
        normalized = normalize_text(query)
        if not normalized:
            return None
        return next((entry for entry, name, _ in self._index if name == normalized), None)


def _fields(entry: PlaceDirectoryEntry) -> list[str]:
    return [field for field in (entry.name, entry.country, entry.state) if field]


@lru_cache(maxsize=1)
def load_bundled_directory() -> PlaceDirectory:
    """Load ``placemap/data/directory.json`` once per process."""
    raw = resources.files("placemap.data").joinpath("directory.json").read_text(encoding="utf-8")
    entries = _ENTRIES_ADAPTER.validate_python(json.loads(raw))
    logger.debug("loaded %d bundled directory entries", len(entries))
    return PlaceDirectory(entries)
