"""
Timer-driven RSVP reader engine.

The engine owns an immutable token sequence, the current position, the
playback state and the reader settings. It advances one token per timer
fire, pausing longer on punctuation and paragraph breaks, and exposes a
command surface plus a read-only snapshot.

Concurrency model: single-threaded and cooperative. At most one timer is
outstanding; every command that moves the position or stops playback
cancels it before doing anything else, so a cancelled fire can never land.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from rsvp_reader.exceptions import ValidationError
from rsvp_reader.models.enums import ReaderState, ReadingMode
from rsvp_reader.models.settings import DEFAULT_SETTINGS, EngineSnapshot, ReaderSettings
from rsvp_reader.models.token import TimedToken, Token
from rsvp_reader.services.tokenizer.timing import TimingCalculator

from .clock import AsyncioClock, Clock

logger = logging.getLogger(__name__)

Subscriber = Callable[[EngineSnapshot], None]


class ReaderEngine:
    """
    State machine that presents tokens one at a time at a controlled pace.

    States are ``idle`` (initial, and again once a pass runs off the end),
    ``playing`` and ``paused``. The engine does not push to renderers on
    its own schedule: subscribers are told after every command that changes
    something and after every timer fire, and can always pull
    ``get_snapshot()``.

    Example:
        >>> from rsvp_reader.services.reader.clock import ManualClock
        >>> from rsvp_reader.services.tokenizer import tokenize
        >>> clock = ManualClock()
        >>> engine = ReaderEngine(tokenize("one two three").tokens, clock=clock)
        >>> engine.play()
        >>> clock.advance(200)
        1
        >>> engine.current_index
        1
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        *,
        initial_index: int = 0,
        settings: Optional[ReaderSettings] = None,
        clock: Optional[Clock] = None,
        timing: Optional[TimingCalculator] = None,
    ) -> None:
        """
        Args:
            tokens: Token sequence from the tokenizer; copied into a tuple.
            initial_index: Starting position (deep link or checkpoint); clamped.
            settings: Initial settings (defaults to ``DEFAULT_SETTINGS``).
            clock: Timer source (defaults to the running asyncio loop).
            timing: Delay policy (defaults to ``TimingCalculator``).
        """
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._clock: Clock = clock or AsyncioClock()
        self._timing = timing or TimingCalculator()
        self._settings = settings or DEFAULT_SETTINGS
        self._state = ReaderState.IDLE
        self._index = self._clamp(initial_index)
        self._timer: Any = None
        self._subscribers: list[Subscriber] = []
        self._disposed = False

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def settings(self) -> ReaderSettings:
        return self._settings

    @property
    def is_empty(self) -> bool:
        return not self._tokens

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    @property
    def current_token(self) -> Optional[Token]:
        if self.is_empty:
            return None
        return self._tokens[self._index]

    def current_timed_token(self) -> Optional[TimedToken]:
        """The current token with the delay it gets under the current settings."""
        token = self.current_token
        if token is None:
            return None
        return self._timing.timed(token, self._settings)

    def get_snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            state=self._state,
            current_index=self._index,
            settings=self._settings,
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            A function that removes the listener; calling it twice is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Playback commands
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Start or resume playback, soft-rewinding when resuming from a pause."""
        self._start(allow_soft_rewind=True)

    def pause(self) -> None:
        """Stop playback in place."""
        if self._disposed:
            return
        self._cancel_timer()
        if self.is_empty:
            return
        self._state = ReaderState.PAUSED
        logger.debug("Paused at %d", self._index)
        self._notify()

    def toggle_play_pause(self) -> None:
        if self._state is ReaderState.PLAYING:
            self.pause()
        else:
            self.play()

    def hold_start(self) -> None:
        """Deadman switch engaged: play from the exact last position."""
        if self._settings.mode is not ReadingMode.HOLD_SPACE:
            logger.debug("hold_start ignored in %s mode", self._settings.mode.value)
            return
        self._start(allow_soft_rewind=False)

    def hold_end(self) -> None:
        """Deadman switch released: always lands in ``paused``."""
        self.pause()

    # ------------------------------------------------------------------
    # Navigation commands
    # ------------------------------------------------------------------

    def step_forward(self, n: int = 1) -> None:
        self._move_to(self._index + n)

    def step_backward(self, n: int = 1) -> None:
        self._move_to(self._index - n)

    def seek_to(self, index: int) -> None:
        self._move_to(index)

    # ------------------------------------------------------------------
    # Settings commands
    # ------------------------------------------------------------------

    def adjust_wpm(self, delta: int) -> None:
        """Change speed relative to the current one; applies from the next token."""
        self.update_settings(wpm=self._settings.wpm + delta)

    def set_wpm(self, value: int) -> None:
        self.update_settings(wpm=value)

    def set_mode(self, mode: ReadingMode | str) -> None:
        """
        Switch between ``autoplay`` and ``hold-space``.

        The engine does not know whether a hold key is down; callers that own
        key state must call ``hold_end()`` before leaving ``hold-space``.
        """
        self.update_settings(mode=mode)

    def set_punctuation_pause(self, enabled: bool) -> None:
        self.update_settings(punctuation_pause=enabled)

    def set_soft_rewind(self, enabled: bool) -> None:
        self.update_settings(soft_rewind=enabled)

    def update_settings(self, **changes: Any) -> None:
        """
        Merge settings atomically. Position and timer are untouched, so a
        token already counting down keeps its original delay.

        Raises:
            ValidationError: On unknown setting names or values of the wrong type.
        """
        if self._disposed:
            return

        unknown = set(changes) - set(ReaderSettings.model_fields)
        if unknown:
            raise ValidationError(f"Unknown reader settings: {sorted(unknown)}")

        try:
            merged = ReaderSettings.model_validate({**self._settings.model_dump(), **changes})
        except PydanticValidationError as exc:
            raise ValidationError(str(exc)) from exc

        if merged == self._settings:
            return

        self._settings = merged
        logger.debug("Settings updated: %s", changes)
        self._notify()

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Release the timer and drop subscribers; later commands are no-ops."""
        self._cancel_timer()
        self._subscribers.clear()
        self._disposed = True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _clamp(self, index: int) -> int:
        if self.is_empty:
            return 0
        return max(0, min(int(index), len(self._tokens) - 1))

    def _start(self, *, allow_soft_rewind: bool) -> None:
        if self._disposed or self.is_empty:
            return

        self._cancel_timer()

        if (
            allow_soft_rewind
            and self._state is ReaderState.PAUSED
            and self._settings.soft_rewind
        ):
            self._index -= min(self._settings.soft_rewind_words, self._index)

        self._state = ReaderState.PLAYING
        logger.debug("Playing from %d at %d wpm", self._index, self._settings.wpm)
        self._schedule_current()
        self._notify()

    def _move_to(self, index: int) -> None:
        if self._disposed or self.is_empty:
            return

        self._cancel_timer()
        self._index = self._clamp(index)
        if self._state is ReaderState.PLAYING:
            self._schedule_current()
        self._notify()

    def _schedule_current(self) -> None:
        delay_ms = self._timing.calculate_delay_ms(self._tokens[self._index], self._settings)
        logger.debug(
            "Showing token %d of %d",
            self._index + 1,
            len(self._tokens),
            extra={"extra_data": {"delay_ms": delay_ms}},
        )
        self._timer = self._clock.schedule(delay_ms, self._tick)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._clock.cancel(self._timer)
            self._timer = None

    def _tick(self) -> None:
        self._timer = None
        if self._disposed or self._state is not ReaderState.PLAYING:
            return

        if self._index + 1 >= len(self._tokens):
            self._state = ReaderState.IDLE
            logger.info("Reached end of %d tokens", len(self._tokens))
            self._notify()
            return

        self._index += 1
        self._schedule_current()
        self._notify()

    def _notify(self) -> None:
        if not self._subscribers:
            return
        snapshot = self.get_snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Reader subscriber failed")
