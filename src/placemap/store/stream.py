"""Most-recent-value observable stream."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class Subscription(Generic[T]):
    """Handle returned by :meth:`StateStream.subscribe`."""

    def __init__(self, stream: StateStream[T], listener: Listener[T]) -> None:
        self._stream = stream
        self._listener = listener
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream._detach(self._listener)


class StateStream(Generic[T]):
    """Holds one current value and pushes every new value to listeners.

    A new subscriber is called immediately with the latest value; no history
    is replayed. Only the owner calls :meth:`emit`.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener[T]) -> Subscription[T]:
        self._listeners.append(listener)
        listener(self._value)
        return Subscription(self, listener)

    def emit(self, value: T) -> None:
        self._value = value
        for listener in list(self._listeners):
            listener(value)

    def _detach(self, listener: Listener[T]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass
