"""
Injectable timer abstraction for the reader engine.

The engine never touches wall-clock timers directly: it asks a Clock to
schedule a callback and to cancel it. ``AsyncioClock`` drives real playback
on an event loop; ``ManualClock`` is deterministic and advanced by hand,
which is what tests and simulations use.
"""

import asyncio
import heapq
import itertools
from typing import Any, Callable, Optional, Protocol

Callback = Callable[[], None]


class Clock(Protocol):
    """Something that can run a callback later and forget it on request."""

    def schedule(self, delay_ms: float, callback: Callback) -> Any:
        """Run ``callback`` once after ``delay_ms`` milliseconds; return a handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback. Unknown or already-fired handles are ignored."""
        ...


class AsyncioClock:
    """Clock backed by ``loop.call_later`` on a single-threaded event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def schedule(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay_ms) / 1000.0, callback)

    def cancel(self, handle: Optional[asyncio.TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()


class _ScheduledCall:
    __slots__ = ("due_ms", "callback", "cancelled", "fired")

    def __init__(self, due_ms: float, callback: Callback) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False


class ManualClock:
    """
    Deterministic clock whose time only moves when ``advance`` is called.

    Callbacks fire in due-time order (ties in scheduling order). Callbacks
    scheduled while advancing fire in the same call if they fall due.

    Example:
        >>> clock = ManualClock()
        >>> fired = []
        >>> _ = clock.schedule(100, lambda: fired.append(clock.now_ms))
        >>> clock.advance(99); fired
        []
        >>> clock.advance(1); fired
        [100.0]
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = float(start_ms)
        self._queue: list[tuple[float, int, _ScheduledCall]] = []
        self._sequence = itertools.count()

    def schedule(self, delay_ms: float, callback: Callback) -> _ScheduledCall:
        call = _ScheduledCall(self.now_ms + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (call.due_ms, next(self._sequence), call))
        return call

    def cancel(self, handle: Optional[_ScheduledCall]) -> None:
        if handle is not None:
            handle.cancelled = True

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def next_due_ms(self) -> Optional[float]:
        """Due time of the next live callback, or None when nothing is pending."""
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def advance(self, delta_ms: float) -> int:
        """
        Move time forward and fire every callback that falls due.

        Returns:
            Number of callbacks fired.
        """
        target = self.now_ms + delta_ms
        fired = 0

        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0][0] > target:
                break
            due_ms, _, call = heapq.heappop(self._queue)
            self.now_ms = due_ms
            call.fired = True
            call.callback()
            fired += 1

        self.now_ms = target
        return fired

    def run_next(self) -> bool:
        """Jump to the next due time and fire what is due then. False if nothing is pending."""
        due = self.next_due_ms()
        if due is None:
            return False
        self.advance(due - self.now_ms)
        return True

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
