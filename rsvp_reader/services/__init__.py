"""Business logic services for the RSVP reader."""

from rsvp_reader.services.reader import ReaderEngine, ReadingSession
from rsvp_reader.services.tokenizer import (
    ORPCalculator,
    TimingCalculator,
    TokenizerPipeline,
    TokenizerResult,
    split_at_orp,
    tokenize,
)

__all__ = [
    # Tokenization
    "TokenizerPipeline",
    "TokenizerResult",
    "tokenize",
    "ORPCalculator",
    "split_at_orp",
    "TimingCalculator",
    # Playback
    "ReaderEngine",
    "ReadingSession",
]
