"""
Tokenizer package for RSVP text processing.

This package contains modules for turning raw text into display tokens,
including:
- tokenizer: TokenizerPipeline class (primary entry point)
- normalizer: Text normalization and Markdown/PDF cleanup
- orp: ORP calculation and grapheme-aware display splitting
- timing: Per-token delay calculation for RSVP playback
- constants: Punctuation classes and timing multipliers

Primary usage:
    >>> from rsvp_reader.services.tokenizer import tokenize, split_at_orp
    >>> result = tokenize("Hello world.")
    >>> first = result.tokens[0]
    >>> split_at_orp(first.display, first.orp_index)
    OrpSplit(left='He', orp='l', right='lo')
"""

from .constants import (
    CLAUSE_PAUSE_BONUS,
    CLAUSE_SEPARATORS,
    ORP_RATIO,
    PARAGRAPH_BREAK_MULTIPLIER,
    PARAGRAPH_SEPARATOR,
    SENTENCE_PAUSE_BONUS,
    SENTENCE_TERMINATORS,
    TOKENIZER_VERSION,
)
from .normalizer import MAX_INPUT_SIZE, NormalizedText, normalize_text
from .orp import (
    ORPCalculator,
    OrpSplit,
    grapheme_count,
    split_at_orp,
    split_token,
)
from .text_utils import clean_word, core_bounds, get_terminal_punctuation, grapheme_spans
from .timing import (
    TimingCalculator,
    calculate_base_duration_ms,
    calculate_word_duration_ms,
    estimate_remaining_ms,
    format_duration,
)
from .tokenizer import TokenizerPipeline, TokenizerResult, tokenize, tokenize_text


def get_tokenizer_version() -> str:
    """Return the current tokenizer version string."""
    return TOKENIZER_VERSION


__all__ = [
    # Main pipeline
    "TokenizerPipeline",
    "TokenizerResult",
    "tokenize",
    "tokenize_text",
    "get_tokenizer_version",
    # Normalizer
    "normalize_text",
    "NormalizedText",
    "MAX_INPUT_SIZE",
    # ORP
    "ORPCalculator",
    "OrpSplit",
    "split_at_orp",
    "split_token",
    "grapheme_spans",
    "grapheme_count",
    # Text utilities
    "clean_word",
    "core_bounds",
    "get_terminal_punctuation",
    # Timing
    "TimingCalculator",
    "calculate_base_duration_ms",
    "calculate_word_duration_ms",
    "estimate_remaining_ms",
    "format_duration",
    # Constants
    "TOKENIZER_VERSION",
    "SENTENCE_TERMINATORS",
    "CLAUSE_SEPARATORS",
    "SENTENCE_PAUSE_BONUS",
    "CLAUSE_PAUSE_BONUS",
    "PARAGRAPH_BREAK_MULTIPLIER",
    "PARAGRAPH_SEPARATOR",
    "ORP_RATIO",
]
