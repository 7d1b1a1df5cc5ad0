"""Tests for RichBusyIndicator."""

from __future__ import annotations

import io

from rich.console import Console

from placemap.activity import ActivityKind, BusyIndicator
from placemap.progress import RichBusyIndicator


def _quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestRichBusyIndicator:
    """RichBusyIndicator drives a Rich status spinner."""

    def test_implements_protocol(self) -> None:
        assert issubclass(RichBusyIndicator, BusyIndicator)

    def test_context_manager(self) -> None:
        indicator = RichBusyIndicator(_quiet_console())
        with indicator as entered:
            assert entered is indicator

    def test_show_update_hide(self) -> None:
        with RichBusyIndicator(_quiet_console()) as indicator:
            indicator.show(ActivityKind.PLACES, ActivityKind.PLACES.message)
            indicator.show(ActivityKind.SAVE, ActivityKind.SAVE.message)
            indicator.hide()

    def test_hide_without_show_is_noop(self) -> None:
        with RichBusyIndicator(_quiet_console()) as indicator:
            # Should not raise even when nothing was shown.
            indicator.hide()

    def test_exit_stops_running_status(self) -> None:
        indicator = RichBusyIndicator(_quiet_console())
        with indicator:
            indicator.show(ActivityKind.GEOCODE, ActivityKind.GEOCODE.message)
        assert indicator._status is None
