"""Pydantic schemas for the RSVP reader API."""

from rsvp_reader.schemas.token import (
    OrpSplitRequest,
    OrpSplitResponse,
    TokenDTO,
    TokenizeRequest,
    TokenizeResponse,
)

__all__ = [
    "TokenDTO",
    "TokenizeRequest",
    "TokenizeResponse",
    "OrpSplitRequest",
    "OrpSplitResponse",
]
