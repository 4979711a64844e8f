from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, List


class TimerHandle(ABC):
    """A pending callback that can be cancelled before it fires."""

    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        raise NotImplementedError


class Scheduler(ABC):
    """Source of one-shot timers measured in milliseconds."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run `callback` once after `delay_ms` unless cancelled first."""
        raise NotImplementedError


class _VirtualTimer(TimerHandle):
    __slots__ = ("due_ms", "seq", "callback", "_cancelled")

    def __init__(self, due_ms: int, seq: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __lt__(self, other: "_VirtualTimer") -> bool:
        return (self.due_ms, self.seq) < (other.due_ms, other.seq)


class VirtualScheduler(Scheduler):
    """
    Deterministic clock for tests and batch runs.

    Time only moves when `advance` is called. Timers due at the same instant
    fire in the order they were scheduled, and a timer scheduled by a callback
    fires within the same `advance` call if it falls inside the window.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: List[_VirtualTimer] = []
        self._counter = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = _VirtualTimer(self._now_ms + max(0, delay_ms), next(self._counter), callback)
        heapq.heappush(self._queue, timer)
        return timer

    def advance(self, delay_ms: int) -> None:
        """Move the clock forward, firing every timer that comes due."""
        target = self._now_ms + max(0, delay_ms)
        while self._queue and self._queue[0].due_ms <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now_ms = timer.due_ms
            timer.callback()
        self._now_ms = target

    def pending(self) -> int:
        """Number of live (not cancelled) timers."""
        return sum(1 for timer in self._queue if not timer.cancelled)


class _AsyncioTimer(TimerHandle):
    __slots__ = ("_handle",)

    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Timers on an asyncio event loop; callbacks run on the loop's thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], Any]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioTimer(loop.call_later(max(0, delay_ms) / 1000.0, callback))
