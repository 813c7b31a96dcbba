from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..preferences.filters import FilterStats
from ..preferences.models import UserPreferenceProfile
from ..scoring.models import ScoreBreakdown
from ..venues.affinity import ActivityCategory
from ..venues.models import Coordinates, Leaning, Venue
from ..weather.models import Regime, TimeOfDay, WeatherObservation


class RecommendationRequest(BaseModel):
    weather: WeatherObservation
    venues: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Raw venue records; invalid ones are skipped, not rejected",
    )
    profile: UserPreferenceProfile = Field(default_factory=UserPreferenceProfile)
    user_location: Coordinates | None = None
    limit: int = Field(default=20, ge=1, le=50)
    rerank: bool | None = Field(
        default=None, description="Override the configured AI reranking toggle"
    )
    user_context: str | None = Field(
        default=None, description="Free-text hints for the LLM reranker"
    )


class RecommendationItem(BaseModel):
    venue: Venue
    score: ScoreBreakdown
    leaning: Leaning
    category: ActivityCategory | None = None
    open_now: bool | None = None


class PipelineMetadata(BaseModel):
    regime: Regime
    severity: float
    time_of_day: TimeOfDay
    weather_summary: str
    ai_reranking_applied: bool = False
    rerank_error: str | None = None
    weights_used: dict[str, float]
    filter_stats: FilterStats
    filter_summary: list[str] = Field(default_factory=list)
    total_candidates: int = 0
    skipped_invalid: int = 0


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    metadata: PipelineMetadata


class FilterPreviewRequest(BaseModel):
    venues: list[dict[str, Any]] = Field(default_factory=list)
    profile: UserPreferenceProfile = Field(default_factory=UserPreferenceProfile)
    user_location: Coordinates | None = None
    weather: WeatherObservation | None = Field(
        default=None, description="Supplies the clock and timezone for open-now checks"
    )


class FilterPreviewResponse(BaseModel):
    passed_ids: list[str]
    stats: FilterStats
    summary: list[str]
    skipped_invalid: int = 0
