"""Health check API route."""

from fastapi import APIRouter

from rsvp_reader.services.tokenizer import get_tokenizer_version

router = APIRouter()

API_VERSION = "0.1.0"


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "tokenizer_version": get_tokenizer_version(),
        "version": API_VERSION,
    }
