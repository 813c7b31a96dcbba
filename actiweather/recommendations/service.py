from __future__ import annotations

import asyncio
import logging

from ..preferences.validation import sanitize_profile
from ..venues.models import Coordinates
from .config import DEFAULT_PIPELINE_CONFIG, PipelineConfig
from .models import RecommendationRequest, RecommendationResponse
from .pipeline import recommend
from .sources import (
    DistanceCalculator,
    HaversineDistance,
    ProfileStore,
    VenueSource,
    WeatherSource,
)

logger = logging.getLogger(__name__)


class RecommendationService:
    """Fetches inputs from the collaborators and hands them to the pipeline."""

    def __init__(
        self,
        weather_source: WeatherSource,
        venue_source: VenueSource,
        profile_store: ProfileStore | None = None,
        distance_calculator: DistanceCalculator | None = None,
        config: PipelineConfig = DEFAULT_PIPELINE_CONFIG,
    ) -> None:
        self.weather_source = weather_source
        self.venue_source = venue_source
        self.profile_store = profile_store
        self.distance_calculator = distance_calculator or HaversineDistance()
        self.config = config

    def _load_profile(self, user_id: str | None):
        raw = None
        if user_id and self.profile_store is not None:
            raw = self.profile_store.load(user_id)
            if raw is None:
                logger.info("No stored profile for %s, using defaults", user_id)
        return sanitize_profile(raw)

    async def recommend_for(
        self,
        location: Coordinates,
        user_id: str | None = None,
        limit: int = 20,
        user_context: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> RecommendationResponse:
        profile = self._load_profile(user_id)
        observation = self.weather_source.current(location)
        raw_venues = self.venue_source.nearby(location, profile.filters.max_radius_km)

        request = RecommendationRequest(
            weather=observation,
            venues=raw_venues,
            profile=profile,
            user_location=location,
            limit=limit,
            user_context=user_context,
        )
        return await recommend(
            request,
            config=self.config,
            distance_calculator=self.distance_calculator,
            cancel_event=cancel_event,
        )
