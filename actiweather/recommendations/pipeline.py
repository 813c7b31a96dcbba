from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ..llm.models import RerankCandidate, RerankRequest
from ..llm.reranker import rerank_venues
from ..preferences.filters import filter_summary, filter_venues
from ..preferences.models import UserPreferenceProfile
from ..scoring.personalization import personalize, severity_adjusted_weights
from ..scoring.suitability import base_components
from ..venues.affinity import categorize, classify_leaning
from ..venues.hours import resolve_open_status
from ..venues.models import Coordinates, Venue
from ..weather.models import WeatherContext, WeatherObservation
from ..weather.regime import classify_weather
from .config import DEFAULT_PIPELINE_CONFIG, PipelineConfig
from .models import (
    PipelineMetadata,
    RecommendationItem,
    RecommendationRequest,
    RecommendationResponse,
)
from .sources import DistanceCalculator

logger = logging.getLogger(__name__)


def parse_venues(raw_venues: Iterable[dict[str, Any]]) -> tuple[list[Venue], int]:
    """Validate raw venue records, skipping bad or duplicate ones."""
    venues: list[Venue] = []
    seen: set[str] = set()
    skipped = 0

    for index, raw in enumerate(raw_venues):
        try:
            venue = Venue.model_validate(raw)
        except ValidationError as exc:
            skipped += 1
            logger.warning(
                "Skipping invalid venue at position %d: %d validation error(s)",
                index, exc.error_count(),
            )
            continue
        if venue.id in seen:
            skipped += 1
            logger.warning("Skipping duplicate venue id %r", venue.id)
            continue
        seen.add(venue.id)
        venues.append(venue)

    return venues, skipped


def attach_distances(
    venues: list[Venue],
    origin: Coordinates | None,
    calculator: DistanceCalculator | None,
) -> list[Venue]:
    if origin is None or calculator is None:
        return venues

    attached: list[Venue] = []
    for venue in venues:
        if venue.distance_km is None and venue.location is not None:
            distance = round(calculator.distance_km(origin, venue.location), 3)
            venue = venue.model_copy(update={"distance_km": distance})
        attached.append(venue)
    return attached


def score_venues(
    venues: Iterable[Venue],
    context: WeatherContext,
    observation: WeatherObservation,
    profile: UserPreferenceProfile,
    config: PipelineConfig = DEFAULT_PIPELINE_CONFIG,
) -> list[RecommendationItem]:
    items: list[RecommendationItem] = []
    for venue in venues:
        leaning = classify_leaning(venue.types)
        open_now = resolve_open_status(
            venue.opening_hours,
            venue.business_status,
            observation.timezone_offset,
            observation.timestamp,
        )
        components = base_components(venue, leaning, context, open_now)
        breakdown = personalize(
            components, venue, profile, open_now,
            config=config.personalization,
            severity=context.severity,
        )
        items.append(RecommendationItem(
            venue=venue,
            score=breakdown,
            leaning=leaning,
            category=categorize(venue.types),
            open_now=open_now,
        ))
    return items


def rank_items(items: list[RecommendationItem]) -> list[RecommendationItem]:
    """Total desc, then rating desc, review count desc, distance asc."""
    if not items:
        return []

    frame = pd.DataFrame({
        "total": [item.score.total for item in items],
        "rating": [
            item.venue.rating if item.venue.rating is not None else -1.0
            for item in items
        ],
        "review_count": [item.venue.rating_count for item in items],
        "distance": [
            item.venue.distance_km if item.venue.distance_km is not None else float("inf")
            for item in items
        ],
    })
    ordered = frame.sort_values(
        by=["total", "rating", "review_count", "distance"],
        ascending=[False, False, False, True],
    )
    return [items[position] for position in ordered.index]


def _rerank_candidates(items: list[RecommendationItem]) -> list[RerankCandidate]:
    return [
        RerankCandidate(
            id=item.venue.id,
            name=item.venue.name,
            address=item.venue.address,
            rating=item.venue.rating,
            review_count=item.venue.rating_count,
            price_tier=item.venue.price_tier,
            types=sorted(item.venue.types),
            open_now=item.open_now,
            score=item.score.total,
        )
        for item in items
    ]


async def recommend(
    request: RecommendationRequest,
    config: PipelineConfig = DEFAULT_PIPELINE_CONFIG,
    distance_calculator: DistanceCalculator | None = None,
    cancel_event: asyncio.Event | None = None,
) -> RecommendationResponse:
    """
    Run the full recommendation pipeline for one request.

    Opening hours are resolved against the observation timestamp, so the
    same request always yields the same deterministic order. Only the
    optional rerank step talks to the outside world, and its failures
    leave that order untouched.
    """
    observation = request.weather
    profile = request.profile

    venues, skipped = parse_venues(request.venues)
    venues = attach_distances(venues, request.user_location, distance_calculator)

    context = classify_weather(observation)

    passed, stats = filter_venues(
        venues,
        profile,
        timezone_offset=observation.timezone_offset,
        at=observation.timestamp,
    )

    ranked = rank_items(score_venues(passed, context, observation, profile, config))
    page = ranked[: request.limit]

    weights = severity_adjusted_weights(profile.weights, context.severity, config.personalization)

    ai_applied = False
    rerank_error: str | None = None
    should_rerank = config.rerank if request.rerank is None else request.rerank

    if should_rerank and page:
        result = await rerank_venues(
            RerankRequest(
                venues=_rerank_candidates(page),
                weather_summary=context.summary,
                user_context=request.user_context,
            ),
            config.llm,
            cancel_event,
        )
        if result.success:
            by_id = {item.venue.id: item for item in page}
            page = [by_id[vid] for vid in result.venue_ids]
            ai_applied = True
        else:
            rerank_error = result.error

    logger.info(
        "Recommended %d of %d venues (regime=%s, filtered=%d, skipped=%d, reranked=%s)",
        len(page), len(venues), context.regime.value, stats.filtered, skipped, ai_applied,
    )

    return RecommendationResponse(
        recommendations=page,
        metadata=PipelineMetadata(
            regime=context.regime,
            severity=context.severity,
            time_of_day=context.time_of_day,
            weather_summary=context.summary,
            ai_reranking_applied=ai_applied,
            rerank_error=rerank_error,
            weights_used={k: round(v, 4) for k, v in weights.items()},
            filter_stats=stats,
            filter_summary=filter_summary(stats),
            total_candidates=len(venues),
            skipped_invalid=skipped,
        ),
    )
