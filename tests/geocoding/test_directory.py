"""Tests for the bundled place directory."""

from __future__ import annotations

import pytest

from placemap.geocoding import PlaceDirectory, load_bundled_directory
from placemap.models import PlaceCategory, PlaceDirectoryEntry


def _entry(name: str, country: str = "Brasil", state: str | None = None) -> PlaceDirectoryEntry:
    return PlaceDirectoryEntry(name=name, country=country, state=state, coordinates=(0.0, 0.0))


class TestBundledDirectory:
    def test_loads_once(self) -> None:
        directory = load_bundled_directory()
        assert directory is load_bundled_directory()
        assert len(directory) >= 30

    def test_natal_is_a_beach(self) -> None:
        natal = load_bundled_directory().find_exact("Natal")
        assert natal is not None
        assert natal.category is PlaceCategory.BEACH
        assert natal.state == "Rio Grande do Norte"

    @pytest.mark.parametrize("query", ["natal", "NATAL", "nátal"])
    def test_suggestions_ignore_case_and_accents(self, query: str) -> None:
        assert load_bundled_directory().suggest(query)[0].name == "Natal"


class TestPlaceDirectory:
    def test_matches_country_and_state(self) -> None:
        directory = PlaceDirectory([_entry("Cusco", country="Peru"), _entry("Olinda", state="Pernambuco")])
        assert [e.name for e in directory.suggest("peru")] == ["Cusco"]
        assert [e.name for e in directory.suggest("pernambuco")] == ["Olinda"]

    def test_matches_when_field_is_contained_in_query(self) -> None:
        directory = PlaceDirectory([_entry("Natal")])
        assert [e.name for e in directory.suggest("natal beach")] == ["Natal"]

    def test_keeps_directory_order_and_limit(self) -> None:
        directory = PlaceDirectory([_entry("São Paulo"), _entry("São José dos Campos"), _entry("São Luís")])
        assert [e.name for e in directory.suggest("sao", limit=2)] == ["São Paulo", "São José dos Campos"]

    def test_find_exact_is_normalized(self) -> None:
        directory = PlaceDirectory([_entry("Brasília")])
        assert directory.find_exact("  brasilia ") is not None
        assert directory.find_exact("brasil") is None
        assert directory.find_exact("") is None
