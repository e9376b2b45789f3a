"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rsvp_reader.api.routes import health, tokens
from rsvp_reader.config import get_settings
from rsvp_reader.exceptions import ValidationError
from rsvp_reader.logging_config import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    setup_logging(
        log_level=settings.log_level,
        json_output=settings.log_json,
        log_file=settings.log_file,
    )
    logger.info("%s API starting", settings.app_name)
    yield


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="RSVP Speed-Reading Application",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Map rejected input to 422 Unprocessable Entity."""
    logger.info("Rejected request to %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# Include routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(tokens.router, prefix="/api", tags=["tokens"])


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": f"{settings.app_name} API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else None,
    }
