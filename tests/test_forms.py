"""Tests for the add-place draft form."""

from __future__ import annotations

from datetime import date

import pytest

from placemap.forms import DraftForm
from placemap.geocoding import (
    NOT_FOUND_MESSAGE,
    GeocodeHit,
    GeocodingResolver,
    ReverseAddress,
    load_bundled_directory,
    suggest_description,
)
from placemap.models import DEFAULT_CENTER, PlaceCategory
from tests.fakes.geocoder import StubGeocoder


def _form(provider: StubGeocoder | None = None) -> DraftForm:
    resolver = GeocodingResolver(load_bundled_directory(), provider)
    return DraftForm(resolver, today=date(2024, 3, 10))


class TestTyping:
    def test_new_form_starts_from_default_draft(self) -> None:
        form = _form()
        assert form.draft.coordinates == DEFAULT_CENTER
        assert form.draft.planned_date == date(2024, 4, 10)

    def test_typing_updates_name_and_suggestions(self) -> None:
        form = _form()
        suggestions = form.type_name("nata")
        assert form.draft.name == "nata"
        assert suggestions[0].name == "Natal"
        assert form.suggestions == suggestions

    def test_short_query_clears_suggestions(self) -> None:
        form = _form()
        form.type_name("nat")
        assert form.type_name("n") == []

    def test_choose_suggestion_fills_gaps(self) -> None:
        form = _form()
        natal = form.type_name("natal")[0]

        form.choose_suggestion(natal)

        assert form.draft.name == "Natal"
        assert form.draft.coordinates == natal.coordinates
        assert form.draft.description == suggest_description("Natal", PlaceCategory.BEACH)
        assert form.suggestions == []

    def test_choose_suggestion_keeps_typed_description(self) -> None:
        form = _form()
        form.draft.description = "My own words"
        form.choose_suggestion(form.type_name("gramado")[0])
        assert form.draft.description == "My own words"


class TestSearch:
    @pytest.mark.asyncio
    async def test_directory_hit(self) -> None:
        provider = StubGeocoder()
        form = _form(provider)
        form.type_name("  GRAMADO ")

        resolved = await form.search()

        assert resolved is not None
        assert resolved.source == "directory"
        assert form.draft.name == "Gramado"
        assert form.draft.description
        assert provider.queries == []

    @pytest.mark.asyncio
    async def test_provider_hit_keeps_typed_name(self) -> None:
        provider = StubGeocoder(hit=GeocodeHit(coordinates=(48.8566, 2.3522), display_name="Paris, France"))
        form = _form(provider)
        form.type_name("Paris")

        resolved = await form.search()

        assert resolved is not None
        assert resolved.source == "provider"
        assert form.draft.name == "Paris"
        assert form.draft.coordinates == (48.8566, 2.3522)
        assert form.draft.description == ""
        assert form.message is None

    @pytest.mark.asyncio
    async def test_not_found_sets_message(self) -> None:
        form = _form(StubGeocoder(failing=True))
        form.type_name("Atlantis")

        assert await form.search() is None
        assert form.message == NOT_FOUND_MESSAGE
        assert form.draft.coordinates == DEFAULT_CENTER


class TestMapClick:
    @pytest.mark.asyncio
    async def test_click_sets_coordinates_and_fills_empty_name(self) -> None:
        form = _form(StubGeocoder(address=ReverseAddress(town="Paraty", state="Rio de Janeiro")))

        await form.map_click(-23.2178, -44.7131)

        assert form.draft.coordinates == (-23.2178, -44.7131)
        assert form.draft.name == "Paraty"

    @pytest.mark.asyncio
    async def test_click_never_overwrites_typed_name(self) -> None:
        form = _form(StubGeocoder(address=ReverseAddress(city="Rio de Janeiro")))
        form.type_name("Cristo Redentor")

        await form.map_click(-22.9519, -43.2105)

        assert form.draft.name == "Cristo Redentor"
        assert form.draft.coordinates == (-22.9519, -43.2105)

    @pytest.mark.asyncio
    async def test_failed_lookup_keeps_coordinates(self) -> None:
        form = _form(StubGeocoder(failing=True))
        await form.map_click(10.0, 20.0)
        assert form.draft.coordinates == (10.0, 20.0)
        assert form.draft.name == ""
