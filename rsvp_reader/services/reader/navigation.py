"""Position helpers shared by renderers and deep links."""

from typing import Optional, Sequence
from urllib.parse import parse_qs, urlencode, urlparse

from rsvp_reader.models.token import Token

_READ_PATH_PREFIX = "/read/"


def find_token_index(tokens: Sequence[Token], token_id: str) -> int:
    """Index of the token with the given id, or -1 if it is not in the sequence."""
    for index, token in enumerate(tokens):
        if token.id == token_id:
            return index
    return -1


def word_position(tokens: Sequence[Token], index: int) -> int:
    """
    Ordinal of the word shown at ``index`` among word tokens only.

    On a break token this is the ordinal of the word just before it.
    """
    words_before = sum(1 for token in tokens[: max(0, index)] if token.is_word)
    if 0 <= index < len(tokens) and tokens[index].is_word:
        return words_before
    return max(0, words_before - 1)


def group_words_into_lines(tokens: Sequence[Token], words_per_line: int) -> list[list[Token]]:
    """Chunk the word tokens into fixed-size lines for a text-flow view."""
    if words_per_line <= 0:
        raise ValueError(f"words_per_line must be positive, got {words_per_line}")
    words = [token for token in tokens if token.is_word]
    return [words[i:i + words_per_line] for i in range(0, len(words), words_per_line)]


def progress_percent(index: int, total: int) -> float:
    """Share of the document shown so far, counting the current token."""
    if total <= 0:
        return 0.0
    return min(100.0, (index + 1) / total * 100)


def build_share_url(base_url: str, document_id: str, index: int) -> str:
    """
    Build a deep link to a position in a document.

    Example:
        >>> build_share_url("https://reader.example", "doc1", 42)
        'https://reader.example/read/doc1?doc=doc1&pos=42'
    """
    query = urlencode({"doc": document_id, "pos": str(index)})
    return f"{base_url.rstrip('/')}{_READ_PATH_PREFIX}{document_id}?{query}"


def parse_share_url(url: str) -> Optional[tuple[str, int]]:
    """
    Extract ``(document_id, index)`` from a deep link.

    Returns:
        None when the URL is not a reader link; an unparsable position is 0.
    """
    parsed = urlparse(url)
    if not parsed.scheme or _READ_PATH_PREFIX not in parsed.path:
        return None

    document_id = parsed.path.split(_READ_PATH_PREFIX, 1)[1].split("/", 1)[0]
    if not document_id:
        return None

    pos_values = parse_qs(parsed.query).get("pos")
    try:
        index = int(pos_values[0]) if pos_values else 0
    except ValueError:
        index = 0

    return document_id, index
