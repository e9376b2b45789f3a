"""Token model: one display unit of an RSVP document."""

from dataclasses import dataclass

from rsvp_reader.models.enums import TokenType


@dataclass(frozen=True)
class Token:
    """A single display unit produced by the tokenizer.

    Attributes:
        id: Identifier unique within the document and stable for its lifetime.
        display: Exact string to show, including attached punctuation.
        core: ``display`` without leading/trailing non-alphanumeric characters.
        type: ``word`` or ``break``.
        orp_index: Offset into ``display`` of the fixation letter (0 for breaks).
        char_start: Start offset in the normalized text.
        char_end: End offset in the normalized text (exclusive).
    """

    id: str
    display: str
    core: str
    type: TokenType
    orp_index: int
    char_start: int
    char_end: int

    @property
    def is_word(self) -> bool:
        return self.type is TokenType.WORD

    @property
    def is_break(self) -> bool:
        return self.type is TokenType.BREAK


@dataclass(frozen=True)
class TimedToken:
    """A token together with the on-screen duration computed for it."""

    token: Token
    delay_ms: float

    @property
    def id(self) -> str:
        return self.token.id

    @property
    def display(self) -> str:
        return self.token.display

    @property
    def type(self) -> TokenType:
        return self.token.type
