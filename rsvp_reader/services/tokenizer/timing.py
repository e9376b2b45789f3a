"""
Timing calculations for RSVP reading.

This module provides the TimingCalculator class for computing how long a
token stays on screen. The base duration comes from the WPM setting; words
ending a sentence or clause get a punctuation bonus when punctuation pauses
are enabled, and paragraph breaks get a fixed pause.
"""

from typing import Sequence

from rsvp_reader.models.settings import ReaderSettings
from rsvp_reader.models.token import TimedToken, Token

from .constants import (
    CLAUSE_PAUSE_BONUS,
    PARAGRAPH_BREAK_MULTIPLIER,
    SENTENCE_PAUSE_BONUS,
)
from .text_utils import ends_clause, ends_sentence


class TimingCalculator:
    """
    Calculate delay multipliers and on-screen durations for tokens.

    Example usage:
        >>> calc = TimingCalculator()
        >>> calc.word_multiplier("hello")
        1.0
        >>> calc.word_multiplier("sentence.")
        2.0
        >>> calc.word_multiplier("word,")
        1.5
        >>> calc.word_multiplier("word,", punctuation_pause=False)
        1.0
    """

    def word_multiplier(self, display: str, *, punctuation_pause: bool = True) -> float:
        """
        Calculate the delay multiplier for a word token.

        Args:
            display: The word as displayed, punctuation included.
            punctuation_pause: Whether terminal punctuation earns a bonus.

        Returns:
            Delay multiplier (1.0 = one base duration).
        """
        multiplier = 1.0
        if not punctuation_pause or not display:
            return multiplier

        if ends_sentence(display):
            multiplier += SENTENCE_PAUSE_BONUS
        elif ends_clause(display):
            multiplier += CLAUSE_PAUSE_BONUS

        return multiplier

    def multiplier(self, token: Token, *, punctuation_pause: bool = True) -> float:
        """Delay multiplier for any token; breaks ignore punctuation settings."""
        if token.is_break:
            return PARAGRAPH_BREAK_MULTIPLIER
        return self.word_multiplier(token.display, punctuation_pause=punctuation_pause)

    def calculate_delay_ms(self, token: Token, settings: ReaderSettings) -> float:
        """
        Calculate the on-screen duration of a token under the given settings.

        At 300 WPM (200 ms base) with punctuation pauses on, ``cat`` shows
        for 200 ms, ``cat.`` for 400 ms, ``cat,`` for 300 ms and a paragraph
        break for 300 ms.
        """
        base = calculate_base_duration_ms(settings.wpm)
        return calculate_word_duration_ms(
            base,
            self.multiplier(token, punctuation_pause=settings.punctuation_pause),
        )

    def timed(self, token: Token, settings: ReaderSettings) -> TimedToken:
        """Annotate a token with its delay."""
        return TimedToken(token=token, delay_ms=self.calculate_delay_ms(token, settings))


def calculate_base_duration_ms(wpm: int) -> float:
    """
    Calculate the base word display duration from WPM (words per minute).

    Raises:
        ValueError: If wpm is not positive.

    Examples:
        >>> calculate_base_duration_ms(300)
        200.0
    """
    if wpm <= 0:
        raise ValueError(f"WPM must be positive, got {wpm}")

    # 60,000 ms per minute / words per minute = ms per word
    return 60_000.0 / wpm


def calculate_word_duration_ms(base_duration_ms: float, delay_multiplier: float) -> float:
    """
    Calculate the actual display duration for a token.

    Examples:
        >>> calculate_word_duration_ms(200.0, 1.5)
        300.0
    """
    return base_duration_ms * delay_multiplier


def estimate_remaining_ms(
    tokens: Sequence[Token],
    start_index: int,
    settings: ReaderSettings,
    calculator: TimingCalculator | None = None,
) -> float:
    """
    Estimate how long it takes to read from ``start_index`` to the end.

    Uses the same per-token delays the reader engine schedules, so the
    estimate reflects punctuation pauses and paragraph breaks.
    """
    calculator = calculator or TimingCalculator()
    start = max(0, start_index)
    return sum(calculator.calculate_delay_ms(token, settings) for token in tokens[start:])


def format_duration(total_ms: float) -> str:
    """
    Format a duration as a short human-readable string.

    Examples:
        >>> format_duration(360_000)
        '6 min'
        >>> format_duration(4_140_000)
        '1 hr 9 min'
    """
    total_minutes = int(total_ms / 1000 / 60)

    if total_minutes < 60:
        return f"{max(1, total_minutes)} min"

    hours = total_minutes // 60
    minutes = total_minutes % 60

    if minutes == 0:
        return f"{hours} hr"

    return f"{hours} hr {minutes} min"
