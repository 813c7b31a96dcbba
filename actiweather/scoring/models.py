from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Confidence(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class BaseComponents(BaseModel):
    """Weather-and-venue sub-scores, before any user personalisation."""

    model_config = ConfigDict(frozen=True)

    base_score: int = Field(ge=0, le=100)
    weather_match: float = Field(ge=0.0, le=20.0)
    time_compatibility: float = Field(ge=0.0, le=10.0)
    distance: float = Field(ge=0.0, le=20.0)
    popularity: float = Field(ge=0.0, le=25.0)
    novelty: float = Field(ge=0.0, le=10.0)


class ScoreBreakdown(BaseModel):
    base_score: int = Field(ge=0, le=100)
    weather_match: float
    time_compatibility: float
    distance: float
    popularity: float
    novelty: float

    weather_component: float
    distance_component: float
    ratings_component: float
    price_component: float
    novelty_component: float
    favorite_bonus: float = 0.0
    mood_bonus: float = 0.0
    penalties: float = 0.0

    total: int = Field(ge=0, le=100)
    confidence: Confidence
    explanation: list[str] = Field(default_factory=list)
