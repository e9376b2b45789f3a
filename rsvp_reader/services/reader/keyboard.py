"""
Keyboard command mapping for the reader.

Raw key capture belongs to the UI toolkit. This controller receives
abstract key events (``KeyboardEvent.code`` names such as ``"Space"`` or
``"ArrowLeft"``) and turns them into engine commands. It owns the one piece
of key state the engine deliberately does not track: whether the hold key
is currently down in ``hold-space`` mode.
"""

import logging
from typing import Callable, Optional

from rsvp_reader.models.enums import ReadingMode

from .engine import ReaderEngine

logger = logging.getLogger(__name__)

STEP_SMALL = 1
STEP_LARGE = 10
WPM_KEY_DELTA = 50


class KeyboardController:
    """Translate key events into reader engine commands."""

    def __init__(
        self,
        engine: ReaderEngine,
        *,
        on_escape: Optional[Callable[[], None]] = None,
        on_toggle_fullscreen: Optional[Callable[[], None]] = None,
    ) -> None:
        self.engine = engine
        self._on_escape = on_escape
        self._on_toggle_fullscreen = on_toggle_fullscreen
        self._space_held = False

    @property
    def space_held(self) -> bool:
        return self._space_held

    def key_down(self, code: str, *, shift: bool = False, repeat: bool = False) -> bool:
        """
        Handle a key press.

        Returns:
            True if the key was consumed (the caller should prevent its default).
        """
        engine = self.engine

        if code == "Space":
            if engine.settings.mode is ReadingMode.HOLD_SPACE:
                if not self._space_held:
                    self._space_held = True
                    engine.hold_start()
            elif not repeat:
                engine.toggle_play_pause()
            return True

        if code == "ArrowLeft":
            engine.step_backward(STEP_LARGE if shift else STEP_SMALL)
            return True

        if code == "ArrowRight":
            engine.step_forward(STEP_LARGE if shift else STEP_SMALL)
            return True

        if code == "ArrowUp":
            engine.adjust_wpm(WPM_KEY_DELTA)
            return True

        if code == "ArrowDown":
            engine.adjust_wpm(-WPM_KEY_DELTA)
            return True

        if code == "Escape":
            if self._on_escape is not None:
                self._on_escape()
            return True

        if code == "KeyF" and self._on_toggle_fullscreen is not None:
            self._on_toggle_fullscreen()
            return True

        return False

    def key_up(self, code: str) -> bool:
        """Handle a key release; only the hold key matters."""
        if code == "Space" and self.engine.settings.mode is ReadingMode.HOLD_SPACE:
            self._release_hold()
            return True
        return False

    def blur(self) -> None:
        """Focus left the reader: a held key will never report its release."""
        if self._space_held:
            logger.debug("Releasing hold on blur")
            self._release_hold()

    def set_mode(self, mode: ReadingMode | str) -> None:
        """Switch modes, ending an active hold before leaving ``hold-space``."""
        mode = ReadingMode(mode)
        if self._space_held and mode is not ReadingMode.HOLD_SPACE:
            self._release_hold()
        self.engine.set_mode(mode)

    def _release_hold(self) -> None:
        self._space_held = False
        self.engine.hold_end()
