from __future__ import annotations

from ..preferences.filters import is_family_friendly
from ..preferences.models import ImportanceWeights, UserPreferenceProfile
from ..venues.models import Venue
from .config import DEFAULT_PERSONALIZATION, PersonalizationConfig
from .models import BaseComponents, Confidence, ScoreBreakdown

_DIMENSIONS = ("weather", "distance", "ratings", "price", "novelty")

PRICE_POINTS = 15.0


def normalize_weights(weights: ImportanceWeights) -> dict[str, float]:
    """Scale the five importance weights to sum to 1; all-zero means equal."""
    raw = {dim: getattr(weights, dim) for dim in _DIMENSIONS}
    total = sum(raw.values())
    if total <= 0:
        return {dim: 1.0 / len(_DIMENSIONS) for dim in _DIMENSIONS}
    return {dim: value / total for dim, value in raw.items()}


def severity_adjusted_weights(
    weights: ImportanceWeights,
    severity: float = 0.0,
    config: PersonalizationConfig = DEFAULT_PERSONALIZATION,
) -> dict[str, float]:
    """
    Shift the normalized weights toward the weather dimension as conditions
    worsen. The weather share is multiplied by a factor that grows linearly
    with severity and peaks at ``extreme_severity``, then everything is
    renormalized to sum to 1.
    """
    normalized = normalize_weights(weights)
    ramp = min(max(severity, 0.0), config.extreme_severity) / config.extreme_severity
    if ramp == 0:
        return normalized

    boosted = dict(normalized)
    boosted["weather"] *= 1 + (config.extreme_weather_multiplier - 1) * ramp
    total = sum(boosted.values())
    return {dim: value / total for dim, value in boosted.items()}


def confidence_for(total: float) -> Confidence:
    if total >= 75:
        return Confidence.high
    if total < 50:
        return Confidence.low
    return Confidence.medium


def _price_points(price_tier: int | None, ceiling: int) -> float | None:
    """Cheaper is better; None means the venue is over budget."""
    if price_tier is None:
        return PRICE_POINTS / 2
    if price_tier > ceiling:
        return None
    if ceiling == 0:
        return PRICE_POINTS
    return (ceiling - price_tier) / ceiling * PRICE_POINTS


def personalize(
    components: BaseComponents,
    venue: Venue,
    profile: UserPreferenceProfile,
    open_now: bool | None = None,
    config: PersonalizationConfig = DEFAULT_PERSONALIZATION,
    severity: float = 0.0,
) -> ScoreBreakdown:
    weights = severity_adjusted_weights(profile.weights, severity, config)
    ratio = {dim: weights[dim] / config.default_weights[dim] for dim in _DIMENSIONS}
    explanation: list[str] = []

    weather_component = (components.weather_match + components.time_compatibility) * ratio["weather"]
    distance_component = components.distance * ratio["distance"]
    ratings_component = components.popularity * ratio["ratings"]
    novelty_component = components.novelty * ratio["novelty"]

    points = _price_points(venue.price_tier, profile.filters.max_price_tier)
    if points is None:
        price_component = -config.over_budget_penalty
        explanation.append(f"Over budget (-{config.over_budget_penalty:g})")
    else:
        price_component = points * ratio["price"]

    favorite_bonus = 0.0
    if venue.types & profile.favorites:
        favorite_bonus = config.favorite_bonus
        explanation.append(f"Favorite activity type (+{favorite_bonus:g})")

    mood_bonus = 0.0
    if venue.types & config.mood_tags(profile.active_mood):
        mood_bonus = config.mood_bonus
        explanation.append(f"Matches {profile.active_mood} mood (+{mood_bonus:g})")

    penalties = 0.0
    if profile.filters.open_now_only and open_now is False:
        penalties += config.closed_penalty
        explanation.append(f"Currently closed (-{config.closed_penalty:g})")
    if profile.filters.family_friendly and not is_family_friendly(venue):
        penalties += config.not_family_friendly_penalty
        explanation.append(f"Not family-friendly (-{config.not_family_friendly_penalty:g})")

    raw_total = (
        weather_component
        + distance_component
        + ratings_component
        + price_component
        + novelty_component
        + favorite_bonus
        + mood_bonus
        - penalties
    )
    total = int(round(max(0.0, min(100.0, raw_total))))

    if severity >= config.extreme_severity:
        explanation.append("Extreme weather, weather fit prioritized")
    if weights["weather"] > config.emphasis_threshold:
        explanation.append("Weather heavily weighted")
    if weights["distance"] > config.emphasis_threshold:
        explanation.append("Distance prioritized")
    if weights["ratings"] > config.emphasis_threshold:
        explanation.append("Ratings emphasized")

    return ScoreBreakdown(
        base_score=components.base_score,
        weather_match=round(components.weather_match, 2),
        time_compatibility=round(components.time_compatibility, 2),
        distance=round(components.distance, 2),
        popularity=round(components.popularity, 2),
        novelty=round(components.novelty, 2),
        weather_component=round(weather_component, 2),
        distance_component=round(distance_component, 2),
        ratings_component=round(ratings_component, 2),
        price_component=round(price_component, 2),
        novelty_component=round(novelty_component, 2),
        favorite_bonus=favorite_bonus,
        mood_bonus=mood_bonus,
        penalties=penalties,
        total=total,
        confidence=confidence_for(total),
        explanation=explanation,
    )
