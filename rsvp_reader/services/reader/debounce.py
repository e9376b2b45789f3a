"""Debounce utility driven by an injectable clock."""

from typing import Any, Callable

from .clock import Clock


class Debouncer:
    """
    Collapse bursts of calls into one call after a quiet period.

    Every ``call`` restarts the delay and replaces the pending arguments;
    the wrapped function runs once, with the latest arguments, when the
    clock fires. ``cancel`` must be called on teardown so no callback
    outlives its owner.
    """

    def __init__(self, clock: Clock, delay_ms: float, func: Callable[..., Any]) -> None:
        self._clock = clock
        self.delay_ms = delay_ms
        self._func = func
        self._handle: Any = None
        self._args: tuple = ()
        self._kwargs: dict = {}

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, *args: Any, **kwargs: Any) -> None:
        """Schedule the function, restarting the delay if already pending."""
        self.cancel()
        self._args = args
        self._kwargs = kwargs
        self._handle = self._clock.schedule(self.delay_ms, self._fire)

    def flush(self) -> None:
        """Run a pending call immediately."""
        if self._handle is None:
            return
        self._clock.cancel(self._handle)
        self._fire()

    def cancel(self) -> None:
        """Drop a pending call without running it."""
        if self._handle is not None:
            self._clock.cancel(self._handle)
            self._handle = None

    def _fire(self) -> None:
        args, kwargs = self._args, self._kwargs
        self._handle = None
        self._args, self._kwargs = (), {}
        self._func(*args, **kwargs)
