"""Reader settings, engine snapshot and checkpoint models."""

import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator

from rsvp_reader.models.enums import ReaderState, ReadingMode

WPM_MIN = 50
WPM_MAX = 1000
WPM_STEP = 50


def snap_wpm(value: float) -> int:
    """Snap a speed to the nearest ``WPM_STEP`` and clamp it into range.

    Halves round up, so 275 becomes 300 and 25 becomes 50.
    """
    snapped = math.floor(value / WPM_STEP + 0.5) * WPM_STEP
    return int(min(WPM_MAX, max(WPM_MIN, snapped)))


class ReaderSettings(BaseModel):
    """Playback settings; instances are immutable and always valid."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    wpm: int = 300
    mode: ReadingMode = ReadingMode.AUTOPLAY
    punctuation_pause: bool = True
    soft_rewind: bool = True
    soft_rewind_words: int = 5

    @field_validator("wpm", mode="before")
    @classmethod
    def clamp_wpm(cls, v):
        if isinstance(v, str):
            try:
                v = float(v)
            except ValueError:
                return v
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            return v
        return snap_wpm(v)

    @field_validator("soft_rewind_words")
    @classmethod
    def clamp_soft_rewind_words(cls, v: int) -> int:
        return max(0, v)

    @property
    def base_delay_ms(self) -> float:
        """Milliseconds per word at the current rate."""
        return 60_000.0 / self.wpm


DEFAULT_SETTINGS = ReaderSettings()


@dataclass(frozen=True)
class EngineSnapshot:
    """The entire externally observable state of a reader engine."""

    state: ReaderState
    current_index: int
    settings: ReaderSettings


@dataclass(frozen=True)
class Checkpoint:
    """Reading position handed to an external sink for persistence."""

    current_index: int
    wpm: int
    mode: ReadingMode

    @classmethod
    def from_snapshot(cls, snapshot: EngineSnapshot) -> "Checkpoint":
        return cls(
            current_index=snapshot.current_index,
            wpm=snapshot.settings.wpm,
            mode=snapshot.settings.mode,
        )
