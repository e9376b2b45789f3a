"""Application configuration settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rsvp_reader.models.enums import ReadingMode
from rsvp_reader.models.settings import ReaderSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables (``RSVP_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="RSVP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "RSVP Reader"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    # Reader defaults
    default_wpm: int = 300
    default_mode: ReadingMode = ReadingMode.AUTOPLAY
    punctuation_pause: bool = True
    soft_rewind: bool = True
    soft_rewind_words: int = Field(default=5, ge=0)

    # Session
    checkpoint_debounce_ms: int = Field(default=1000, ge=0)

    # Limits
    max_input_chars: int = Field(default=10_000_000, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in allowed:
            raise ValueError(f"Must be one of {allowed}")
        return level

    def reader_settings(self) -> ReaderSettings:
        """Build the default reader settings for a new session."""
        return ReaderSettings(
            wpm=self.default_wpm,
            mode=self.default_mode,
            punctuation_pause=self.punctuation_pause,
            soft_rewind=self.soft_rewind,
            soft_rewind_words=self.soft_rewind_words,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
