"""
Reading session: one engine bound to one document, plus a debounced
checkpoint sink.

The engine only emits change notifications. The session decides when a
change is worth persisting (position, speed or mode moved) and debounces
the write so rapid key presses produce a single save.
"""

import logging
from typing import Iterable, Optional, Protocol

from rsvp_reader.config import get_settings
from rsvp_reader.models.settings import Checkpoint, EngineSnapshot, ReaderSettings
from rsvp_reader.models.token import Token

from .clock import AsyncioClock, Clock
from .debounce import Debouncer
from .engine import ReaderEngine

logger = logging.getLogger(__name__)


class CheckpointSink(Protocol):
    """External collaborator that persists reading progress."""

    def save(self, checkpoint: Checkpoint) -> None:
        ...


class InMemoryCheckpointSink:
    """Sink that keeps every saved checkpoint in a list."""

    def __init__(self) -> None:
        self.saved: list[Checkpoint] = []

    @property
    def last(self) -> Optional[Checkpoint]:
        return self.saved[-1] if self.saved else None

    def save(self, checkpoint: Checkpoint) -> None:
        self.saved.append(checkpoint)


class ReadingSession:
    """
    Owns a ReaderEngine for the lifetime of one reading session.

    Reader settings and the checkpoint debounce default to the application
    settings (``RSVP_DEFAULT_WPM``, ``RSVP_CHECKPOINT_DEBOUNCE_MS`` and so on).

    Usage:
        with ReadingSession(tokens, sink, clock=clock) as session:
            session.engine.play()
            ...
        # leaving the block cancels the engine timer and any pending save
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        sink: Optional[CheckpointSink] = None,
        *,
        clock: Optional[Clock] = None,
        initial_index: int = 0,
        settings: Optional[ReaderSettings] = None,
        checkpoint_debounce_ms: Optional[float] = None,
    ) -> None:
        app_settings = get_settings()
        if settings is None:
            settings = app_settings.reader_settings()
        if checkpoint_debounce_ms is None:
            checkpoint_debounce_ms = app_settings.checkpoint_debounce_ms

        self._clock = clock or AsyncioClock()
        self.engine = ReaderEngine(
            tokens,
            initial_index=initial_index,
            settings=settings,
            clock=self._clock,
        )
        self._sink = sink
        self._last_checkpoint = Checkpoint.from_snapshot(self.engine.get_snapshot())
        self._debouncer = Debouncer(self._clock, checkpoint_debounce_ms, self._save_checkpoint)
        self._unsubscribe = self.engine.subscribe(self._on_change)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def save_pending(self) -> bool:
        return self._debouncer.pending

    def snapshot(self) -> EngineSnapshot:
        return self.engine.get_snapshot()

    def restore(self, checkpoint: Checkpoint) -> None:
        """Apply a saved checkpoint: seek to its position, adopt its speed and mode."""
        self.engine.seek_to(checkpoint.current_index)
        self.engine.update_settings(wpm=checkpoint.wpm, mode=checkpoint.mode)
        # the restored state is already persisted
        self._debouncer.cancel()
        self._last_checkpoint = Checkpoint.from_snapshot(self.engine.get_snapshot())

    def close(self, *, flush: bool = False) -> None:
        """
        Tear the session down.

        Args:
            flush: Save a pending checkpoint now instead of dropping it.
        """
        if self._closed:
            return
        if flush:
            self._debouncer.flush()
        self._debouncer.cancel()
        self._unsubscribe()
        self.engine.dispose()
        self._closed = True
        logger.debug("Reading session closed")

    def __enter__(self) -> "ReadingSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _on_change(self, snapshot: EngineSnapshot) -> None:
        checkpoint = Checkpoint.from_snapshot(snapshot)
        if checkpoint == self._last_checkpoint:
            # back where the last save left off; a pending save is stale
            self._debouncer.cancel()
            return
        self._debouncer.call(checkpoint)

    def _save_checkpoint(self, checkpoint: Checkpoint) -> None:
        if self._sink is None:
            self._last_checkpoint = checkpoint
            return
        try:
            self._sink.save(checkpoint)
        except Exception:
            logger.exception("Failed to save checkpoint at index %d", checkpoint.current_index)
            return
        self._last_checkpoint = checkpoint
