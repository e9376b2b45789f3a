"""Shared pytest fixtures."""

import pytest
from fastapi.testclient import TestClient

from rsvp_reader.config import reset_settings
from rsvp_reader.models.enums import TokenType
from rsvp_reader.models.token import Token
from rsvp_reader.services.reader.clock import ManualClock


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test so env overrides do not leak."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def client():
    """FastAPI test client."""
    from rsvp_reader.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def clock() -> ManualClock:
    """Deterministic clock starting at t=0."""
    return ManualClock()


@pytest.fixture
def make_tokens():
    """Factory for word token sequences from display strings.

    An empty string produces a paragraph break token.
    """

    def _make(*displays: str) -> list[Token]:
        tokens = []
        offset = 0
        for i, display in enumerate(displays):
            if display:
                tokens.append(
                    Token(
                        id=f"t-{i}",
                        display=display,
                        core=display.strip(".,;:!?\"'()"),
                        type=TokenType.WORD,
                        orp_index=0,
                        char_start=offset,
                        char_end=offset + len(display),
                    )
                )
                offset += len(display) + 1
            else:
                tokens.append(
                    Token(
                        id=f"t-{i}",
                        display="",
                        core="",
                        type=TokenType.BREAK,
                        orp_index=0,
                        char_start=offset - 1,
                        char_end=offset + 1,
                    )
                )
                offset += 2
        return tokens

    return _make


@pytest.fixture
def word_tokens(make_tokens) -> list[Token]:
    """Twenty plain words with no punctuation."""
    return make_tokens(*[f"word{i}" for i in range(20)])
