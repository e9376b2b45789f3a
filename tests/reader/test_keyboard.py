"""Tests for keyboard command mapping."""

import pytest

from rsvp_reader.models.enums import ReaderState, ReadingMode
from rsvp_reader.models.settings import ReaderSettings
from rsvp_reader.services.reader.engine import ReaderEngine
from rsvp_reader.services.reader.keyboard import KeyboardController


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def engine(word_tokens, clock) -> ReaderEngine:
    return ReaderEngine(word_tokens, clock=clock)


@pytest.fixture
def keys(engine) -> KeyboardController:
    return KeyboardController(engine)


@pytest.fixture
def hold_keys(word_tokens, clock) -> KeyboardController:
    engine = ReaderEngine(
        word_tokens,
        clock=clock,
        settings=ReaderSettings(mode=ReadingMode.HOLD_SPACE),
    )
    return KeyboardController(engine)


# =============================================================================
# Autoplay Mode
# =============================================================================


class TestAutoplayKeys:
    """Tests for key handling in autoplay mode."""

    def test_space_toggles(self, keys, engine):
        """Space toggles play and pause."""
        assert keys.key_down("Space") is True
        assert engine.state is ReaderState.PLAYING

        keys.key_down("Space")
        assert engine.state is ReaderState.PAUSED

    def test_space_repeat_ignored(self, keys, engine):
        """Auto-repeat of a held space does not toggle again."""
        keys.key_down("Space")
        keys.key_down("Space", repeat=True)

        assert engine.state is ReaderState.PLAYING

    def test_space_up_ignored(self, keys, engine):
        """Releasing space does nothing in autoplay."""
        keys.key_down("Space")

        assert keys.key_up("Space") is False
        assert engine.state is ReaderState.PLAYING

    @pytest.mark.parametrize(
        "code,shift,expected",
        [
            ("ArrowRight", False, 11),
            ("ArrowRight", True, 19),
            ("ArrowLeft", False, 9),
            ("ArrowLeft", True, 0),
        ],
    )
    def test_arrow_steps(self, keys, engine, code, shift, expected):
        """Arrows step by one, or ten with shift."""
        engine.seek_to(10)
        keys.key_down(code, shift=shift)

        assert engine.current_index == expected

    def test_arrow_speed(self, keys, engine):
        """Up and down arrows change speed by 50."""
        keys.key_down("ArrowUp")
        assert engine.settings.wpm == 350

        keys.key_down("ArrowDown")
        keys.key_down("ArrowDown")
        assert engine.settings.wpm == 250

    def test_escape_and_fullscreen_callbacks(self, engine):
        """Escape and F invoke their callbacks."""
        events = []
        keys = KeyboardController(
            engine,
            on_escape=lambda: events.append("escape"),
            on_toggle_fullscreen=lambda: events.append("fullscreen"),
        )

        keys.key_down("Escape")
        keys.key_down("KeyF")

        assert events == ["escape", "fullscreen"]

    def test_fullscreen_without_callback_not_consumed(self, keys):
        """F passes through when nobody handles fullscreen."""
        assert keys.key_down("KeyF") is False

    def test_unknown_key_not_consumed(self, keys, engine):
        """Unmapped keys are left to the caller."""
        assert keys.key_down("KeyQ") is False
        assert engine.state is ReaderState.IDLE


# =============================================================================
# Hold-Space Mode
# =============================================================================


class TestHoldSpaceKeys:
    """Tests for the deadman switch."""

    def test_hold_and_release(self, hold_keys, clock):
        """Holding space plays; releasing pauses."""
        engine = hold_keys.engine
        hold_keys.key_down("Space")
        assert engine.state is ReaderState.PLAYING
        assert hold_keys.space_held

        clock.advance(400)
        hold_keys.key_up("Space")

        assert engine.state is ReaderState.PAUSED
        assert engine.current_index == 2
        assert not hold_keys.space_held

    def test_repeat_does_not_restart(self, hold_keys, clock):
        """Key repeats while held keep the running countdown."""
        hold_keys.key_down("Space")
        clock.advance(150)
        hold_keys.key_down("Space", repeat=True)
        clock.advance(50)

        assert hold_keys.engine.current_index == 1

    def test_rehold_resumes_exactly(self, hold_keys, clock):
        """Holding again resumes at the exact position, no rewind."""
        hold_keys.key_down("Space")
        clock.advance(1400)
        hold_keys.key_up("Space")
        hold_keys.key_down("Space")

        assert hold_keys.engine.current_index == 7

    def test_blur_releases_hold(self, hold_keys):
        """Losing focus while holding pauses playback."""
        hold_keys.key_down("Space")
        hold_keys.blur()

        assert hold_keys.engine.state is ReaderState.PAUSED
        assert not hold_keys.space_held

    def test_blur_without_hold_is_noop(self, hold_keys):
        """Blur without an active hold changes nothing."""
        hold_keys.blur()

        assert hold_keys.engine.state is ReaderState.IDLE

    def test_switch_to_autoplay_ends_hold(self, hold_keys):
        """Leaving hold-space mode while holding pauses first."""
        hold_keys.key_down("Space")
        hold_keys.set_mode(ReadingMode.AUTOPLAY)

        assert hold_keys.engine.state is ReaderState.PAUSED
        assert hold_keys.engine.settings.mode is ReadingMode.AUTOPLAY
        assert not hold_keys.space_held

    def test_switch_to_hold_mode(self, keys, engine):
        """Switching into hold-space mode by string value."""
        keys.set_mode("hold-space")

        assert engine.settings.mode is ReadingMode.HOLD_SPACE
