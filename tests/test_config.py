"""Tests for application settings."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from rsvp_reader.config import Settings, get_settings, reset_settings
from rsvp_reader.models.enums import ReadingMode


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self):
        """Defaults apply when nothing is set."""
        settings = Settings(_env_file=None)

        assert settings.app_name == "RSVP Reader"
        assert settings.log_level == "INFO"
        assert settings.default_wpm == 300
        assert settings.checkpoint_debounce_ms == 1000
        assert settings.max_input_chars == 10_000_000

    def test_env_override(self, monkeypatch):
        """RSVP_* variables override defaults."""
        monkeypatch.setenv("RSVP_DEFAULT_WPM", "450")
        monkeypatch.setenv("RSVP_DEFAULT_MODE", "hold-space")
        monkeypatch.setenv("RSVP_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.default_wpm == 450
        assert settings.default_mode is ReadingMode.HOLD_SPACE
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_negative_rewind_rejected(self):
        """Configured rewind distance must not be negative."""
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, soft_rewind_words=-1)

    def test_reader_settings(self):
        """Configured defaults become reader settings, snapped onto the grid."""
        settings = Settings(_env_file=None, default_wpm=420, soft_rewind=False)
        reader = settings.reader_settings()

        assert reader.wpm == 400
        assert reader.soft_rewind is False
        assert reader.soft_rewind_words == 5


class TestSettingsCache:
    """Tests for the cached accessor."""

    def test_cached(self):
        """get_settings returns the same instance until reset."""
        assert get_settings() is get_settings()

    def test_reset(self, monkeypatch):
        """reset_settings re-reads the environment."""
        first = get_settings()
        monkeypatch.setenv("RSVP_MAX_INPUT_CHARS", "1234")
        reset_settings()

        second = get_settings()

        assert second is not first
        assert second.max_input_chars == 1234
