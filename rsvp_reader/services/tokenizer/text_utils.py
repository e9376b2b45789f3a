"""
Shared text processing utilities for the tokenizer package.

These functions provide common operations used by multiple modules
(tokenizer, ORPCalculator, TimingCalculator).
"""

from typing import Optional

import regex

from .constants import (
    CLAUSE_SEPARATORS,
    SENTENCE_TERMINATORS,
    TRAILING_CLOSERS,
)

_GRAPHEME_RE = regex.compile(r"\X")


def grapheme_spans(text: str) -> list[tuple[int, int]]:
    """
    Split text into user-perceived characters (extended grapheme clusters).

    Combining marks, Indic vowel signs, Hangul jamo sequences, emoji
    modifiers and ZWJ sequences stay with their base; regional indicators
    pair up into flags.

    Returns:
        ``(start, end)`` code point offsets of each cluster, in order.

    Example:
        >>> grapheme_spans("cafe\\u0301!")
        [(0, 1), (1, 2), (2, 3), (3, 5), (5, 6)]
    """
    return [match.span() for match in _GRAPHEME_RE.finditer(text)]


def get_terminal_punctuation(word: str) -> Optional[str]:
    """
    Get the terminal punctuation character, ignoring trailing quotes/brackets.

    Args:
        word: The word to check.

    Returns:
        The terminal punctuation character, or None if the word does not end
        with a sentence terminator or clause separator.

    Examples:
        >>> get_terminal_punctuation("hello.")
        '.'
        >>> get_terminal_punctuation('said."')
        '.'
        >>> get_terminal_punctuation("hello") is None
        True
    """
    if not word:
        return None

    # Strip trailing closers (quotes, brackets) to find actual punctuation
    idx = len(word) - 1
    while idx >= 0 and word[idx] in TRAILING_CLOSERS:
        idx -= 1

    if idx < 0:
        return None

    char = word[idx]
    if char in SENTENCE_TERMINATORS or char in CLAUSE_SEPARATORS:
        return char

    return None


def ends_sentence(word: str) -> bool:
    """Return True if the word ends with a sentence terminator."""
    return get_terminal_punctuation(word) in SENTENCE_TERMINATORS


def ends_clause(word: str) -> bool:
    """Return True if the word ends with a clause separator."""
    return get_terminal_punctuation(word) in CLAUSE_SEPARATORS


def core_bounds(word: str) -> tuple[int, int]:
    """
    Locate the core of a word: the span from the first to the last grapheme
    cluster holding an alphanumeric character. Bounds never cut a cluster,
    so trailing vowel signs and combining marks stay in the core.

    Args:
        word: The word to inspect.

    Returns:
        ``(start, end)`` offsets into ``word``. Both are 0 when the word has
        no alphanumeric character.

    Examples:
        >>> core_bounds('"Hello,"')
        (1, 6)
        >>> core_bounds("...")
        (0, 0)
    """
    core = [
        (start, end)
        for start, end in grapheme_spans(word)
        if any(ch.isalnum() for ch in word[start:end])
    ]
    if not core:
        return (0, 0)
    return (core[0][0], core[-1][1])


def clean_word(word: str) -> str:
    """
    Remove leading/trailing non-alphanumeric characters from a word.

    Examples:
        >>> clean_word('"Hello,"')
        'Hello'
        >>> clean_word("(word)")
        'word'
        >>> clean_word("--")
        ''
    """
    start, end = core_bounds(word)
    return word[start:end]
