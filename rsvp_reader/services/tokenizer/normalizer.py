"""
Text normalization for consistent tokenization.

Key behavior:
- Unifies line endings and collapses whitespace inside paragraphs
- Detects paragraph boundaries (blank lines) and joins blocks with one separator
- Markdown -> best-effort plain text (strip formatting; keep readable content)
- Best-effort PDF cleanup
- Produces block offsets that match the returned `text`
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Literal

from rsvp_reader.exceptions import ValidationError

from .constants import PARAGRAPH_SEPARATOR

logger = logging.getLogger(__name__)

# Maximum input size: ~10 million characters
MAX_INPUT_SIZE = 10_000_000

SourceTypeLiteral = Literal["paste", "md", "pdf"]

_BLANK_LINE_RE = re.compile(r"\n[^\S\n]*\n\s*")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class NormalizedText:
    """Result of text normalization."""

    text: str
    block_starts: list[int] = field(default_factory=list)  # offset where each block begins

    @property
    def paragraph_count(self) -> int:
        return len(self.block_starts)


def normalize_text(
    raw_text: str,
    source_type: SourceTypeLiteral = "paste",
    *,
    max_input_chars: int = MAX_INPUT_SIZE,
) -> NormalizedText:
    """
    Normalize text for tokenization.

    Args:
        raw_text: The input text
        source_type: "paste", "md", or "pdf"
        max_input_chars: Upper bound on the input length

    Returns:
        NormalizedText with cleaned text and block offsets

    Raises:
        ValidationError: If the input exceeds ``max_input_chars``.
    """
    if not raw_text:
        return NormalizedText(text="")

    if len(raw_text) > max_input_chars:
        raise ValidationError(
            f"Input text exceeds maximum size of {max_input_chars:,} characters "
            f"(got {len(raw_text):,} characters)"
        )

    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")

    if source_type == "pdf":
        text = _normalize_pdf_text(text)

    if source_type == "md":
        blocks = _markdown_to_blocks(text)
    else:
        blocks = _plain_text_to_blocks(text)

    normalized = _finalize_blocks(blocks)
    logger.debug(
        "Normalized %d chars into %d blocks (source_type=%s)",
        len(raw_text),
        normalized.paragraph_count,
        source_type,
    )
    return normalized


def _normalize_pdf_text(text: str) -> str:
    """
    Handle common PDF extraction artifacts.

    - Joins hyphenated line breaks (e.g., "exam-\\nple" -> "example")
    - Joins lines that don't end with sentence punctuation
    """
    text = re.sub(r"(\w)-\n(\w)", r"\1\2", text)

    joined: list[str] = []
    buffer = ""

    for line in text.split("\n"):
        line = line.strip()
        if not line:
            if buffer:
                joined.append(buffer)
                buffer = ""
            joined.append("")  # keep the paragraph break
            continue

        if buffer and buffer[-1] not in ".!?:":
            buffer += " " + line
        else:
            if buffer:
                joined.append(buffer)
            buffer = line

    if buffer:
        joined.append(buffer)

    return "\n".join(joined)


def _plain_text_to_blocks(text: str) -> list[str]:
    """Split plain text into paragraph blocks at blank lines."""
    return [para for para in _BLANK_LINE_RE.split(text) if para.strip()]


def _markdown_to_blocks(text: str) -> list[str]:
    """
    Convert Markdown into best-effort plain-text blocks.

    - Strip formatting (emphasis, links, images, inline code markers)
    - Drop fenced code blocks entirely
    - Headings and list items become blocks of their own
    """
    blocks: list[str] = []
    current_para: list[str] = []

    fence_re = re.compile(r"^\s*(```|~~~)")
    heading_re = re.compile(r"^\s*(#{1,6})\s+(.+?)\s*$")
    list_re = re.compile(r"^\s*(?:[-*+]|(\d+)\.)\s+(.+?)\s*$")
    hr_re = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")

    in_fenced_code = False

    def flush_paragraph() -> None:
        nonlocal current_para
        if not current_para:
            return

        clean = _strip_markdown_inline(" ".join(current_para))
        if clean:
            blocks.append(clean)
        current_para = []

    for line in text.split("\n"):
        if fence_re.match(line):
            in_fenced_code = not in_fenced_code
            continue

        if in_fenced_code:
            continue

        if hr_re.match(line) or not line.strip():
            flush_paragraph()
            continue

        heading_match = heading_re.match(line)
        if heading_match:
            flush_paragraph()
            heading_text = _strip_markdown_inline(heading_match.group(2))
            if heading_text:
                blocks.append(heading_text)
            continue

        list_match = list_re.match(line)
        if list_match:
            flush_paragraph()
            item_text = _strip_markdown_inline(list_match.group(2))
            if item_text:
                blocks.append(item_text)
            continue

        # Blockquotes: keep content, drop the marker
        if line.lstrip().startswith(">"):
            line = re.sub(r"^\s*>\s?", "", line)

        current_para.append(line)

    flush_paragraph()
    return blocks


def _strip_markdown_inline(text: str) -> str:
    """
    Best-effort Markdown inline cleanup:
    - Images: ![alt](url) -> alt
    - Links: [text](url) -> text
    - Inline code: `code` -> code
    - Emphasis: **text** / *text* / __text__ / _text_ -> text
    - Strikethrough: ~~text~~ -> text
    - HTML tags removed
    """
    text = re.sub(r"!\[([^\]]*)\]\([^)]+\)", r"\1", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    text = re.sub(r"`([^`]+)`", r"\1", text)
    text = re.sub(r"\*\*([^*]+)\*\*", r"\1", text)
    text = re.sub(r"\*([^*]+)\*", r"\1", text)
    text = re.sub(r"__([^_]+)__", r"\1", text)
    text = re.sub(r"_([^_]+)_", r"\1", text)
    text = re.sub(r"~~([^~]+)~~", r"\1", text)
    text = re.sub(r"<[^>]+>", "", text)
    return text.strip()


def _collapse_whitespace(text: str) -> str:
    """Turn every run of whitespace inside a block into a single space."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _finalize_blocks(blocks: list[str]) -> NormalizedText:
    """Join blocks with the paragraph separator and record their offsets."""
    parts: list[str] = []
    block_starts: list[int] = []
    offset = 0

    for block in blocks:
        block_text = _collapse_whitespace(block)
        if not block_text:
            continue

        if parts:
            parts.append(PARAGRAPH_SEPARATOR)
            offset += len(PARAGRAPH_SEPARATOR)

        block_starts.append(offset)

        parts.append(block_text)
        offset += len(block_text)

    return NormalizedText(text="".join(parts), block_starts=block_starts)
