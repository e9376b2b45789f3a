"""Pydantic schemas for tokenizer API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from rsvp_reader.models.enums import SourceType, TokenType


class SchemaBase(BaseModel):
    """Base schema with ORM attribute support."""

    model_config = ConfigDict(from_attributes=True)


class TokenDTO(SchemaBase):
    id: str
    display: str
    core: str
    type: TokenType
    orp_index: int
    char_start: int
    char_end: int


class TokenizeRequest(BaseModel):
    text: str
    source_type: SourceType = SourceType.PASTE
    id_prefix: str | None = Field(None, max_length=64)


class TokenizeResponse(BaseModel):
    full_text: str
    word_count: int
    tokenizer_version: str
    tokens: list[TokenDTO]


class OrpSplitRequest(BaseModel):
    display: str
    orp_index: int


class OrpSplitResponse(BaseModel):
    left: str
    orp: str
    right: str
