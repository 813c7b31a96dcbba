from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Regime(str, Enum):
    PERFECT = "PERFECT"
    GOOD = "GOOD"
    POOR = "POOR"
    NEUTRAL = "NEUTRAL"


class TimeOfDay(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"
    night = "night"


class WeatherObservation(BaseModel):
    """A single provider snapshot, metric units (°C, m/s, metres)."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    feels_like: float
    wind_speed: float = Field(default=0.0, ge=0.0)
    cloud_cover: float = Field(default=0.0, ge=0.0, le=100.0)
    humidity: float = Field(default=50.0, ge=0.0, le=100.0)
    visibility: float = Field(default=10000.0, ge=0.0)
    condition_code: int | None = None
    description: str | None = None
    sunrise: datetime | None = None
    sunset: datetime | None = None
    timestamp: datetime
    timezone_offset: int | None = Field(
        default=None, description="Offset from UTC in seconds"
    )


class WeatherContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    regime: Regime
    severity: float = Field(ge=0.0, le=1.0)
    time_of_day: TimeOfDay
    summary: str
    feels_like: float
    cloud_cover: float
    humidity: float
    heavy_precipitation: bool = False
    light_precipitation: bool = False
    high_wind: bool = False
    temperature_extreme: bool = False
    low_visibility: bool = False

    @property
    def poor_conditions(self) -> int:
        """Number of distinct adverse conditions currently present."""
        return sum((
            self.heavy_precipitation,
            self.high_wind,
            self.temperature_extreme,
            self.low_visibility,
        ))
