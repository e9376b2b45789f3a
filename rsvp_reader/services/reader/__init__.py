"""
Reader package: the timer-driven playback engine and what surrounds it.

- clock: injectable timer (asyncio-backed and manual)
- engine: ReaderEngine state machine
- debounce: Debouncer for checkpoint writes
- session: ReadingSession tying an engine to a checkpoint sink
- keyboard: key event to engine command mapping
- navigation: token lookup, line grouping and deep links
"""

from .clock import AsyncioClock, Clock, ManualClock
from .debounce import Debouncer
from .engine import ReaderEngine
from .keyboard import KeyboardController
from .navigation import (
    build_share_url,
    find_token_index,
    group_words_into_lines,
    parse_share_url,
    progress_percent,
    word_position,
)
from .session import CheckpointSink, InMemoryCheckpointSink, ReadingSession

__all__ = [
    "Clock",
    "AsyncioClock",
    "ManualClock",
    "Debouncer",
    "ReaderEngine",
    "ReadingSession",
    "CheckpointSink",
    "InMemoryCheckpointSink",
    "KeyboardController",
    "find_token_index",
    "word_position",
    "group_words_into_lines",
    "progress_percent",
    "build_share_url",
    "parse_share_url",
]
