from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Leaning(str, Enum):
    INDOOR = "INDOOR"
    OUTDOOR = "OUTDOOR"
    MIXED = "MIXED"


class BusinessStatus(str, Enum):
    OPERATIONAL = "OPERATIONAL"
    CLOSED_TEMPORARILY = "CLOSED_TEMPORARILY"
    CLOSED_PERMANENTLY = "CLOSED_PERMANENTLY"


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class DayTime(BaseModel):
    """A weekday (0 = Sunday) and local wall-clock time."""

    model_config = ConfigDict(frozen=True)

    day: int = Field(..., ge=0, le=6)
    hour: int = Field(default=0, ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute


class OpeningPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    open: DayTime | None = None
    close: DayTime | None = None


class OpeningHours(BaseModel):
    model_config = ConfigDict(frozen=True)

    periods: tuple[OpeningPeriod, ...] = ()
    weekday_descriptions: tuple[str, ...] = ()
    open_now: bool | None = Field(
        default=None, description="Provider's own open-now flag, unvalidated"
    )


class AccessibilityOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    wheelchair_accessible_entrance: bool | None = None
    wheelchair_accessible_parking: bool | None = None
    wheelchair_accessible_restroom: bool | None = None
    wheelchair_accessible_seating: bool | None = None


class Venue(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    address: str | None = None
    location: Coordinates | None = None
    types: frozenset[str] = frozenset()
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    rating_count: int = Field(default=0, ge=0)
    price_tier: int | None = Field(default=None, ge=0, le=4)
    opening_hours: OpeningHours = Field(default_factory=OpeningHours)
    business_status: BusinessStatus | None = None
    accessibility: AccessibilityOptions = Field(default_factory=AccessibilityOptions)
    outdoor_seating: bool | None = None
    distance_km: float | None = Field(default=None, ge=0.0)

    @field_validator("types", mode="before")
    @classmethod
    def _lowercase_types(cls, value):
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = (value,)
        return frozenset(str(t).strip().lower() for t in value if str(t).strip())
