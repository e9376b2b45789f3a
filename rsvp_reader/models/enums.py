"""Enums for the reader data model."""

from enum import Enum


class TokenType(str, Enum):
    """Tag of a display unit.

    ``break`` marks a paragraph boundary and carries no displayable letters.
    """

    WORD = "word"
    BREAK = "break"


class ReadingMode(str, Enum):
    """How playback is driven."""

    AUTOPLAY = "autoplay"
    HOLD_SPACE = "hold-space"


class ReaderState(str, Enum):
    """Playback state of a reader engine."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


class SourceType(str, Enum):
    """Enum for document source types."""

    PASTE = "paste"
    MARKDOWN = "md"
    PDF = "pdf"
