"""Tests for StateStream."""

from __future__ import annotations

import pytest

from placemap.store import StateStream


def test_subscriber_receives_current_value_immediately() -> None:
    stream: StateStream[int] = StateStream(1)
    stream.emit(2)
    seen: list[int] = []

    stream.subscribe(seen.append)

    assert seen == [2]


def test_emit_pushes_to_every_listener() -> None:
    stream: StateStream[str] = StateStream("a")
    first: list[str] = []
    second: list[str] = []
    stream.subscribe(first.append)
    stream.subscribe(second.append)

    stream.emit("b")

    assert first == ["a", "b"]
    assert second == ["a", "b"]
    assert stream.value == "b"


def test_unsubscribe_stops_delivery() -> None:
    stream: StateStream[int] = StateStream(0)
    seen: list[int] = []
    subscription = stream.subscribe(seen.append)

    subscription.unsubscribe()
    subscription.unsubscribe()
    stream.emit(1)

    assert subscription.closed
    assert seen == [0]
    assert stream.listener_count == 0


def test_listener_may_unsubscribe_during_emit() -> None:
    stream: StateStream[int] = StateStream(0)
    seen: list[int] = []
    subscriptions = []

    def once(value: int) -> None:
        seen.append(value)
        if value == 1:
            subscriptions[0].unsubscribe()

    subscriptions.append(stream.subscribe(once))
    other: list[int] = []
    stream.subscribe(other.append)

    stream.emit(1)
    stream.emit(2)

    assert seen == [0, 1]
    assert other == [0, 1, 2]


def test_listener_errors_propagate_to_emitter() -> None:
    stream: StateStream[int] = StateStream(0)

    def explode(value: int) -> None:
        if value:
            raise RuntimeError("listener failed")

    stream.subscribe(explode)
    with pytest.raises(RuntimeError):
        stream.emit(1)
