"""Delayed callbacks on the event loop."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Protocol


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Runs a callback after a delay; the camera-then-popup sequence relies on it."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Schedule *callback* to run once after *delay* seconds."""


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an event loop's ``call_later``.

    Without an injected *loop*, :meth:`call_later` must be called while a loop
    is running and raises :class:`RuntimeError` otherwise. Synchronous callers
    pass a loop explicitly or use another :class:`Scheduler`.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
