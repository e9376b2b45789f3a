"""Tokenization and ORP split API routes."""

import logging

from fastapi import APIRouter

from rsvp_reader.config import get_settings
from rsvp_reader.schemas.token import (
    OrpSplitRequest,
    OrpSplitResponse,
    TokenDTO,
    TokenizeRequest,
    TokenizeResponse,
)
from rsvp_reader.services.tokenizer import TokenizerPipeline, split_at_orp

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/tokenize", response_model=TokenizeResponse)
def tokenize_document(request: TokenizeRequest) -> TokenizeResponse:
    """Tokenize raw text into display tokens."""
    pipeline = TokenizerPipeline(max_input_chars=get_settings().max_input_chars)
    result = pipeline.process(
        request.text,
        source_type=request.source_type.value,
        id_prefix=request.id_prefix,
    )
    return TokenizeResponse(
        full_text=result.full_text,
        word_count=result.word_count,
        tokenizer_version=result.tokenizer_version,
        tokens=[TokenDTO.model_validate(token) for token in result.tokens],
    )


@router.post("/orp/split", response_model=OrpSplitResponse)
def split_display(request: OrpSplitRequest) -> OrpSplitResponse:
    """Split a display string around its fixation letter."""
    left, orp, right = split_at_orp(request.display, request.orp_index)
    return OrpSplitResponse(left=left, orp=orp, right=right)
