from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_MOOD_PRESETS: Mapping[str, frozenset[str]] = MappingProxyType({
    "adventure": frozenset({"hiking_area", "park", "tourist_attraction", "zoo", "amusement_park"}),
    "relaxation": frozenset({"spa", "library", "cafe", "book_store", "art_gallery", "museum"}),
    "social": frozenset({"restaurant", "bar", "night_club", "bowling_alley", "amusement_center"}),
    "solo": frozenset({"library", "museum", "art_gallery", "book_store", "cafe", "gym"}),
    "family": frozenset({"park", "zoo", "aquarium", "museum", "restaurant", "playground", "amusement_park"}),
    "foodie": frozenset({"restaurant", "cafe", "bakery", "food_court", "meal_takeaway", "bar"}),
    "shopping": frozenset({"shopping_mall", "clothing_store", "book_store", "department_store"}),
    "culture": frozenset({"museum", "art_gallery", "library", "performing_arts_theater", "tourist_attraction"}),
    "fitness": frozenset({"gym", "park", "hiking_area", "stadium", "golf_course"}),
    "nightlife": frozenset({"bar", "night_club", "casino", "movie_theater", "restaurant"}),
})


@dataclass(frozen=True)
class PersonalizationConfig:
    # Default share of each dimension; user weights are compared against these
    default_weights: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({
        "weather": 0.30,
        "distance": 0.20,
        "ratings": 0.25,
        "price": 0.15,
        "novelty": 0.10,
    }))
    mood_presets: Mapping[str, frozenset[str]] = field(default_factory=lambda: DEFAULT_MOOD_PRESETS)
    favorite_bonus: float = 15.0
    mood_bonus: float = 10.0
    over_budget_penalty: float = 20.0
    closed_penalty: float = 30.0
    not_family_friendly_penalty: float = 20.0
    emphasis_threshold: float = 0.3
    # Severity at which weather counts as extreme; below it the boost ramps linearly
    extreme_severity: float = 0.7
    # 3.5x lifts the default 30% weather share to 60% before renormalising
    extreme_weather_multiplier: float = 3.5

    def mood_tags(self, mood: str | None) -> frozenset[str]:
        if not mood:
            return frozenset()
        return self.mood_presets.get(mood, frozenset())


DEFAULT_PERSONALIZATION = PersonalizationConfig()
