"""Data model for the RSVP reader."""

from rsvp_reader.models.enums import ReaderState, ReadingMode, SourceType, TokenType
from rsvp_reader.models.settings import (
    DEFAULT_SETTINGS,
    WPM_MAX,
    WPM_MIN,
    WPM_STEP,
    Checkpoint,
    EngineSnapshot,
    ReaderSettings,
    snap_wpm,
)
from rsvp_reader.models.token import TimedToken, Token

__all__ = [
    "Token",
    "TimedToken",
    "TokenType",
    "ReadingMode",
    "ReaderState",
    "SourceType",
    "ReaderSettings",
    "EngineSnapshot",
    "Checkpoint",
    "DEFAULT_SETTINGS",
    "WPM_MIN",
    "WPM_MAX",
    "WPM_STEP",
    "snap_wpm",
]
