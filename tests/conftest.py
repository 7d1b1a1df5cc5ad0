"""Shared test fixtures for placemap tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from placemap.activity import ActivityTracker
from placemap.models import Place, PlaceStatus
from placemap.persistence import FallbackCache
from placemap.store import PlaceStore
from tests.fakes.backend import FlakyBackend
from tests.fakes.places import FIXED_TODAY, make_place


@pytest.fixture
def planned_place() -> Place:
    """A planned place with a backend id."""
    return make_place("Natal", backend_id="p-1", planned_date=date(2024, 6, 1))


@pytest.fixture
def visited_place() -> Place:
    """A visited place with a narrative."""
    return make_place(
        "Gramado",
        backend_id="p-2",
        status=PlaceStatus.VISITED,
        coordinates=(-29.3747, -50.8764),
        description="Serra gaúcha",
        visit_date=date(2024, 1, 15),
        visit_description="Cold and lovely",
    )


@pytest.fixture
def cache(tmp_path: Path) -> FallbackCache:
    return FallbackCache(tmp_path / "places-cache.json")


@pytest.fixture
def backend(planned_place: Place, visited_place: Place) -> FlakyBackend:
    return FlakyBackend([planned_place, visited_place])


@pytest.fixture
def activity() -> ActivityTracker:
    return ActivityTracker()


@pytest.fixture
def store(backend: FlakyBackend, cache: FallbackCache, activity: ActivityTracker) -> PlaceStore:
    """Store over the flaky backend with a fixed clock."""
    return PlaceStore(backend, cache, activity=activity, today=lambda: FIXED_TODAY)
