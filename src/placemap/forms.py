"""Add-place form state wired to the geocoding resolver."""

from __future__ import annotations

import logging
from datetime import date

from placemap.geocoding.descriptions import suggest_description
from placemap.geocoding.models import ResolvedLocation
from placemap.geocoding.resolver import NOT_FOUND_MESSAGE, GeocodingResolver
from placemap.lifecycle import new_draft
from placemap.models.directory import PlaceDirectoryEntry
from placemap.models.enums import PlaceCategory
from placemap.models.place import PlaceDraft

logger = logging.getLogger(__name__)


class DraftForm:
    """Holds a :class:`PlaceDraft` while the user fills it in.

    Resolver results only ever fill gaps: a generated description never
    replaces text the user typed, and a reverse-lookup label never replaces
    a name the user entered.

    Attributes:
        suggestions: Directory suggestions for the current query.
        message: User-facing message from the last search, if any.
    """

    def __init__(self, resolver: GeocodingResolver, draft: PlaceDraft | None = None, *, today: date | None = None) -> None:
        self._resolver = resolver
        self.draft = draft or new_draft(today)
        self.suggestions: list[PlaceDirectoryEntry] = []
        self.message: str | None = None

    def type_name(self, text: str) -> list[PlaceDirectoryEntry]:
        self.draft.name = text
        self.suggestions = self._resolver.suggest(text)
        return self.suggestions

    def choose_suggestion(self, entry: PlaceDirectoryEntry) -> None:
        self.draft.name = entry.name
        self.draft.coordinates = entry.coordinates
        self._fill_description(entry.name, entry.category)
        self.suggestions = []
        self.message = None

    async def search(self) -> ResolvedLocation | None:
        """Resolve the typed name; sets :attr:`message` when nothing is found."""
        self.suggestions = []
        resolved = await self._resolver.search(self.draft.name)
        if resolved is None:
            self.message = NOT_FOUND_MESSAGE
            return None
        self.message = None
        self.draft.coordinates = resolved.coordinates
        if resolved.entry is not None:
            self.draft.name = resolved.entry.name
            self._fill_description(resolved.entry.name, resolved.entry.category)
        return resolved

    async def map_click(self, latitude: float, longitude: float) -> None:
        self.draft.coordinates = (latitude, longitude)
        label = await self._resolver.reverse(latitude, longitude)
        if label and not self.draft.name.strip():
            self.draft.name = label

    def _fill_description(self, name: str, category: PlaceCategory | None) -> None:
        if self.draft.description.strip():
            return
        self.draft.description = suggest_description(name, category)
