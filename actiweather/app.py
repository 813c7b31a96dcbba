from __future__ import annotations

from typing import Any

from fastapi import Body, FastAPI

from .preferences.filters import filter_summary, filter_venues
from .preferences.validation import preference_summary, sanitize_profile, validate_profile
from .recommendations.config import DEFAULT_PIPELINE_CONFIG
from .recommendations.models import (
    FilterPreviewRequest,
    FilterPreviewResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.pipeline import attach_distances, parse_venues, recommend
from .recommendations.sources import HaversineDistance

app = FastAPI(title="ActiWeather Recommendation API", version="1.0.0")

_distance = HaversineDistance()


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/moods")
def moods() -> dict[str, dict[str, list[str]]]:
    presets = DEFAULT_PIPELINE_CONFIG.personalization.mood_presets
    return {"moods": {name: sorted(tags) for name, tags in presets.items()}}


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
async def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    return await recommend(body, distance_calculator=_distance)


@app.post("/filters/preview", response_model=FilterPreviewResponse)
def filters_preview(body: FilterPreviewRequest) -> FilterPreviewResponse:
    venues, skipped = parse_venues(body.venues)
    venues = attach_distances(venues, body.user_location, _distance)

    weather = body.weather
    passed, stats = filter_venues(
        venues,
        body.profile,
        timezone_offset=weather.timezone_offset if weather else None,
        at=weather.timestamp if weather else None,
    )
    return FilterPreviewResponse(
        passed_ids=[v.id for v in passed],
        stats=stats,
        summary=filter_summary(stats),
        skipped_invalid=skipped,
    )


# ── Profile endpoints ────────────────────────────────────────────────────


@app.post("/profiles/validate")
def profiles_validate(raw: dict[str, Any] = Body(...)) -> dict:
    report = validate_profile(raw)
    profile = sanitize_profile(raw)
    return {
        "report": report.model_dump(),
        "profile": profile.model_dump(mode="json"),
        "summary": preference_summary(profile),
    }
