"""
Main tokenization pipeline for RSVP reading.

This module provides the TokenizerPipeline class that turns raw text into
an immutable sequence of Token objects ready for RSVP display.

Pipeline stages:
1. Validation (empty / whitespace-only input is rejected)
2. Text normalization (line endings, whitespace, paragraph detection)
3. Whitespace word splitting with character offsets
4. Paragraph break insertion
5. Core extraction, id assignment and ORP calculation

Example usage:
    >>> result = tokenize("Hello, world.\\n\\nNext paragraph.")
    >>> [t.display for t in result.tokens]
    ['Hello,', 'world.', '', 'Next', 'paragraph.']
"""

import itertools
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional

from rsvp_reader.exceptions import ValidationError
from rsvp_reader.models.enums import TokenType
from rsvp_reader.models.token import Token

from .constants import PARAGRAPH_SEPARATOR, TOKENIZER_VERSION
from .normalizer import MAX_INPUT_SIZE, SourceTypeLiteral, normalize_text
from .orp import ORPCalculator
from .text_utils import clean_word

logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"\S+")


@dataclass(frozen=True)
class TokenizerResult:
    """Result of the tokenization pipeline.

    Attributes:
        full_text: The normalized text all token offsets refer to.
        tokens: Word and break tokens in document order.
        tokenizer_version: Version of the tokenizer used.
    """

    full_text: str
    tokens: tuple[Token, ...]
    tokenizer_version: str = TOKENIZER_VERSION

    @property
    def word_count(self) -> int:
        return sum(1 for token in self.tokens if token.is_word)

    @property
    def paragraph_count(self) -> int:
        return sum(1 for token in self.tokens if token.is_break) + (1 if self.tokens else 0)


def _validate_token_invariants(full_text: str, token: Token) -> None:
    """
    Validate tokenizer invariants and raise explicit errors on violations.

    Args:
        full_text: The normalized source text.
        token: Token to validate.
    """
    if not (0 <= token.char_start <= token.char_end <= len(full_text)):
        raise ValueError(
            f"char offsets out of bounds: {token.char_start}..{token.char_end}"
        )

    extracted = full_text[token.char_start:token.char_end]

    if token.is_break:
        if extracted.strip():
            raise ValueError(f"break token spans text: {extracted!r}")
        return

    if extracted != token.display:
        raise ValueError(
            "char_offset mismatch: "
            f"expected {token.display!r}, got {extracted!r}"
        )

    if token.core not in token.display:
        raise ValueError(
            "core not found in display: "
            f"core={token.core!r} display={token.display!r}"
        )

    if not (0 <= token.orp_index < len(token.display)):
        raise ValueError(f"orp_index out of bounds: orp_index={token.orp_index}")


def _uuid_ids() -> Callable[[], str]:
    return lambda: uuid.uuid4().hex


def _sequential_ids(prefix: str) -> Callable[[], str]:
    counter = itertools.count()
    return lambda: f"{prefix}-{next(counter)}"


class TokenizerPipeline:
    """
    Tokenization pipeline for RSVP text processing.

    Example usage:
        >>> pipeline = TokenizerPipeline()
        >>> result = pipeline.process("Hello world. This is a test.")
        >>> result.word_count
        6
    """

    def __init__(
        self,
        *,
        max_input_chars: int = MAX_INPUT_SIZE,
        orp_calculator: Optional[ORPCalculator] = None,
    ) -> None:
        """
        Initialize the tokenizer pipeline.

        Args:
            max_input_chars: Upper bound on raw input length.
            orp_calculator: ORP calculator to use (defaults to the standard one).
        """
        self.max_input_chars = max_input_chars
        self._orp_calculator = orp_calculator or ORPCalculator()

    def process(
        self,
        raw_text: str,
        source_type: SourceTypeLiteral = "paste",
        *,
        id_prefix: Optional[str] = None,
    ) -> TokenizerResult:
        """
        Process raw text through the complete tokenization pipeline.

        Args:
            raw_text: The input text to tokenize.
            source_type: "paste" (plain text), "md" (Markdown) or "pdf"
                         (extracted PDF text).
            id_prefix: When given, token ids are ``f"{id_prefix}-{n}"`` with a
                       running sequence number; otherwise each id is a uuid4.

        Returns:
            TokenizerResult with the normalized text and its tokens.

        Raises:
            ValidationError: If the text is empty, whitespace-only, too large,
                             or has nothing left to read after normalization.
        """
        if not raw_text or not raw_text.strip():
            raise ValidationError("No text content provided")

        normalized = normalize_text(
            raw_text,
            source_type=source_type,
            max_input_chars=self.max_input_chars,
        )
        if not normalized.block_starts:
            raise ValidationError("No readable text found after normalization")

        text = normalized.text
        next_id = _sequential_ids(id_prefix) if id_prefix is not None else _uuid_ids()
        separator = len(PARAGRAPH_SEPARATOR)
        block_ends = [start - separator for start in normalized.block_starts[1:]]
        block_ends.append(len(text))

        tokens: List[Token] = []
        previous_end: Optional[int] = None

        for block_start, block_end in zip(normalized.block_starts, block_ends):
            first_in_block = True

            for match in _WORD_PATTERN.finditer(text, block_start, block_end):
                if first_in_block and previous_end is not None:
                    tokens.append(
                        self._make_break(next_id(), previous_end, match.start())
                    )
                first_in_block = False

                tokens.append(self._make_word(next_id(), match.group(0), match.start()))
                previous_end = match.end()

        for token in tokens:
            _validate_token_invariants(text, token)

        result = TokenizerResult(full_text=text, tokens=tuple(tokens))
        logger.info(
            "Tokenized %d words in %d paragraphs (%d tokens)",
            result.word_count,
            result.paragraph_count,
            len(result.tokens),
        )
        return result

    def _make_word(self, token_id: str, display: str, start: int) -> Token:
        return Token(
            id=token_id,
            display=display,
            core=clean_word(display),
            type=TokenType.WORD,
            orp_index=self._orp_calculator.calculate_for_display(display),
            char_start=start,
            char_end=start + len(display),
        )

    def _make_break(self, token_id: str, start: int, end: int) -> Token:
        return Token(
            id=token_id,
            display="",
            core="",
            type=TokenType.BREAK,
            orp_index=0,
            char_start=start,
            char_end=end,
        )


def tokenize(
    text: str,
    source_type: SourceTypeLiteral = "paste",
    *,
    id_prefix: Optional[str] = None,
) -> TokenizerResult:
    """
    Tokenize text using the default pipeline configuration.

    Example:
        >>> tokenize("Hello, world!").word_count
        2
    """
    pipeline = TokenizerPipeline()
    return pipeline.process(text, source_type=source_type, id_prefix=id_prefix)


def tokenize_text(
    text: str,
    source_type: SourceTypeLiteral = "paste",
    *,
    id_prefix: Optional[str] = None,
) -> tuple[str, tuple[Token, ...]]:
    """Tokenize text and return ``(full_text, tokens)``."""
    result = tokenize(text, source_type=source_type, id_prefix=id_prefix)
    return result.full_text, result.tokens
