"""Tests for NominatimGeocoder over httpx.MockTransport."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from placemap.activity import ActivityKind, ActivityTracker, BusyIndicator
from placemap.exceptions import GeocodingError
from placemap.geocoding import NominatimGeocoder


class KindRecorder(BusyIndicator):
    def __init__(self) -> None:
        self.kinds: list[ActivityKind] = []

    def show(self, kind: ActivityKind, message: str) -> None:
        self.kinds.append(kind)

    def hide(self) -> None:
        pass


def _geocoder(
    handler: Callable[[httpx.Request], httpx.Response], activity: ActivityTracker | None = None
) -> NominatimGeocoder:
    return NominatimGeocoder(
        base_url="https://nominatim.test",
        user_agent="placemap-tests",
        activity=activity,
        transport=httpx.MockTransport(handler),
    )


class TestSearch:
    @pytest.mark.asyncio
    async def test_returns_first_hit(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[
                    {"lat": "-5.7945", "lon": "-35.2110", "display_name": "Natal, Rio Grande do Norte, Brasil"},
                    {"lat": "0", "lon": "0", "display_name": "Other"},
                ],
            )

        async with _geocoder(handler) as geocoder:
            hit = await geocoder.search("Natal")

        assert hit is not None
        assert hit.coordinates == (-5.7945, -35.211)
        assert hit.display_name == "Natal, Rio Grande do Norte, Brasil"
        request = seen[0]
        assert request.url.path == "/search"
        assert request.url.params["q"] == "Natal"
        assert request.url.params["format"] == "json"
        assert request.url.params["limit"] == "1"
        assert request.headers["User-Agent"] == "placemap-tests"

    @pytest.mark.asyncio
    async def test_empty_result(self) -> None:
        async with _geocoder(lambda _r: httpx.Response(200, json=[])) as geocoder:
            assert await geocoder.search("Atlantis") is None

    @pytest.mark.asyncio
    async def test_http_error(self) -> None:
        async with _geocoder(lambda _r: httpx.Response(503)) as geocoder:
            with pytest.raises(GeocodingError, match="/search failed"):
                await geocoder.search("Natal")

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        async with _geocoder(lambda _r: httpx.Response(200, text="<html>")) as geocoder:
            with pytest.raises(GeocodingError, match="invalid JSON"):
                await geocoder.search("Natal")

    @pytest.mark.asyncio
    async def test_invalid_coordinates(self) -> None:
        async with _geocoder(lambda _r: httpx.Response(200, json=[{"lat": "north"}])) as geocoder:
            with pytest.raises(GeocodingError, match="invalid coordinates"):
                await geocoder.search("Natal")

    @pytest.mark.asyncio
    async def test_requires_context_manager(self) -> None:
        with pytest.raises(GeocodingError, match="not initialized"):
            await NominatimGeocoder().search("Natal")


class TestReverse:
    @pytest.mark.asyncio
    async def test_returns_address(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"address": {"town": "Paraty", "state": "Rio de Janeiro", "road": "X"}})

        async with _geocoder(handler) as geocoder:
            address = await geocoder.reverse(-23.2178, -44.7131)

        assert address is not None
        assert address.town == "Paraty"
        assert seen[0].url.path == "/reverse"
        assert seen[0].url.params["addressdetails"] == "1"
        assert seen[0].url.params["lat"] == "-23.2178"

    @pytest.mark.asyncio
    async def test_error_payload_means_no_address(self) -> None:
        async with _geocoder(lambda _r: httpx.Response(200, json={"error": "Unable to geocode"})) as geocoder:
            assert await geocoder.reverse(0.0, -30.0) is None


@pytest.mark.asyncio
async def test_lookups_are_tracked_as_activity() -> None:
    indicator = KindRecorder()
    activity = ActivityTracker(indicator)

    def handler(request: httpx.Request) -> httpx.Response:
        assert activity.in_flight == 1
        if request.url.path == "/search":
            return httpx.Response(200, json=[])
        return httpx.Response(200, json={"address": {}})

    async with _geocoder(handler, activity) as geocoder:
        await geocoder.search("x")
        await geocoder.reverse(1.0, 2.0)

    assert indicator.kinds == [ActivityKind.GEOCODE, ActivityKind.REVERSE_GEOCODE]
    assert activity.in_flight == 0
