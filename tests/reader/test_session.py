"""Tests for reading sessions and checkpoint persistence."""

import pytest

from rsvp_reader.config import reset_settings
from rsvp_reader.models.enums import ReaderState, ReadingMode
from rsvp_reader.models.settings import Checkpoint, ReaderSettings
from rsvp_reader.services.reader.session import InMemoryCheckpointSink, ReadingSession


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def sink() -> InMemoryCheckpointSink:
    return InMemoryCheckpointSink()


@pytest.fixture
def session(word_tokens, sink, clock) -> ReadingSession:
    """Session over twenty words with a 1000 ms checkpoint debounce."""
    return ReadingSession(word_tokens, sink, clock=clock)


class FailingSink:
    def __init__(self):
        self.attempts = 0

    def save(self, checkpoint):
        self.attempts += 1
        raise OSError("disk full")


# =============================================================================
# Checkpoints
# =============================================================================


class TestCheckpoints:
    """Tests for debounced checkpoint saving."""

    def test_no_save_without_change(self, session, sink, clock):
        """A fresh session saves nothing."""
        clock.advance(5000)

        assert sink.saved == []

    def test_rapid_steps_save_once(self, session, sink, clock):
        """A burst of navigation produces one checkpoint."""
        for _ in range(6):
            session.engine.step_forward()
            clock.advance(100)

        assert sink.saved == []
        clock.advance(1000)
        assert sink.saved == [Checkpoint(current_index=6, wpm=300, mode=ReadingMode.AUTOPLAY)]

    def test_speed_change_saves(self, session, sink, clock):
        """A speed change is worth a checkpoint."""
        session.engine.adjust_wpm(100)
        clock.advance(1000)

        assert sink.last.wpm == 400

    def test_play_pause_without_movement_saves_nothing(self, session, sink, clock):
        """State changes alone do not trigger a save."""
        session.engine.play()
        session.engine.pause()
        clock.advance(5000)

        assert sink.saved == []

    def test_return_to_saved_position_cancels_pending(self, session, sink, clock):
        """Moving back to the saved checkpoint drops the pending save."""
        session.engine.step_forward()
        session.engine.step_backward()
        clock.advance(5000)

        assert sink.saved == []
        assert not session.save_pending

    def test_playback_saves_while_reading(self, session, sink, clock):
        """Continuous playback still checkpoints after it stops."""
        session.engine.play()
        clock.advance(1000)
        session.engine.pause()
        clock.advance(1000)

        assert sink.last.current_index == 5

    def test_failing_sink_is_logged(self, word_tokens, clock, caplog):
        """A sink error is logged and the save is retried on the next change."""
        sink = FailingSink()
        session = ReadingSession(word_tokens, sink, clock=clock)

        session.engine.step_forward()
        clock.advance(1000)
        session.engine.step_forward()
        clock.advance(1000)

        assert sink.attempts == 2
        assert "Failed to save checkpoint" in caplog.text

    def test_without_sink(self, word_tokens, clock):
        """A session without a sink still runs."""
        session = ReadingSession(word_tokens, clock=clock)
        session.engine.step_forward()
        clock.advance(1000)

        assert session.snapshot().current_index == 1


# =============================================================================
# Application Defaults
# =============================================================================


class TestApplicationDefaults:
    """Tests for session defaults taken from RSVP_* settings."""

    @pytest.fixture
    def configured_env(self, monkeypatch):
        monkeypatch.setenv("RSVP_DEFAULT_WPM", "450")
        monkeypatch.setenv("RSVP_DEFAULT_MODE", "hold-space")
        monkeypatch.setenv("RSVP_SOFT_REWIND", "false")
        monkeypatch.setenv("RSVP_CHECKPOINT_DEBOUNCE_MS", "200")
        reset_settings()

    def test_reader_settings_from_env(self, configured_env, word_tokens, clock):
        """A session without explicit settings reads its defaults from the environment."""
        settings = ReadingSession(word_tokens, clock=clock).snapshot().settings

        assert settings.wpm == 450
        assert settings.mode is ReadingMode.HOLD_SPACE
        assert settings.soft_rewind is False

    def test_checkpoint_debounce_from_env(self, configured_env, word_tokens, sink, clock):
        """The checkpoint debounce follows RSVP_CHECKPOINT_DEBOUNCE_MS."""
        session = ReadingSession(word_tokens, sink, clock=clock)
        session.engine.step_forward()

        clock.advance(199)
        assert sink.saved == []
        clock.advance(1)
        assert sink.last.current_index == 1

    def test_explicit_arguments_win(self, configured_env, word_tokens, sink, clock):
        """Arguments passed to the session override the environment."""
        session = ReadingSession(
            word_tokens,
            sink,
            clock=clock,
            settings=ReaderSettings(wpm=600),
            checkpoint_debounce_ms=1000,
        )
        session.engine.step_forward()
        clock.advance(500)

        assert session.snapshot().settings.wpm == 600
        assert sink.saved == []


# =============================================================================
# Restore and Teardown
# =============================================================================


class TestRestoreAndClose:
    """Tests for resuming from a checkpoint and closing the session."""

    def test_restore_applies_checkpoint(self, session, sink, clock):
        """restore() seeks and adopts speed and mode without re-saving."""
        session.restore(Checkpoint(current_index=12, wpm=450, mode=ReadingMode.HOLD_SPACE))
        clock.advance(5000)

        snapshot = session.snapshot()
        assert snapshot.current_index == 12
        assert snapshot.settings.wpm == 450
        assert snapshot.settings.mode is ReadingMode.HOLD_SPACE
        assert sink.saved == []

    def test_initial_index(self, word_tokens, sink, clock):
        """The session can open at a deep-linked position."""
        session = ReadingSession(word_tokens, sink, clock=clock, initial_index=7)

        assert session.snapshot().current_index == 7

    def test_close_cancels_everything(self, session, sink, clock):
        """close() leaves no pending callbacks behind."""
        session.engine.play()
        clock.advance(400)
        session.close()

        assert clock.pending == 0
        assert session.closed
        assert session.engine.is_disposed
        clock.advance(5000)
        assert sink.saved == []

    def test_close_with_flush(self, session, sink):
        """close(flush=True) writes the pending checkpoint first."""
        session.engine.seek_to(9)
        session.close(flush=True)

        assert sink.last.current_index == 9

    def test_close_twice(self, session):
        """Closing twice is harmless."""
        session.close()
        session.close()

        assert session.closed

    def test_context_manager(self, word_tokens, sink, clock):
        """Leaving the with-block closes the session."""
        with ReadingSession(word_tokens, sink, clock=clock) as session:
            session.engine.play()
            assert session.engine.state is ReaderState.PLAYING

        assert session.closed
        assert clock.pending == 0
