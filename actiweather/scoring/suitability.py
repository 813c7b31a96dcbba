from __future__ import annotations

from ..venues.models import Leaning, Venue
from ..weather.models import Regime, TimeOfDay, WeatherContext
from .models import BaseComponents

BASELINE = 50

# (indoor, outdoor, mixed, outdoor seating)
_REGIME_MODIFIERS: dict[Regime, tuple[int, int, int, int]] = {
    Regime.PERFECT: (-10, 25, 10, 10),
    Regime.GOOD: (-5, 15, 5, 5),
    Regime.POOR: (20, -20, -10, -10),
    Regime.NEUTRAL: (5, 5, 5, 0),
}

# Stacked once per adverse condition present in a POOR regime
_POOR_CONDITION_MODIFIERS: tuple[int, int, int, int] = (5, -10, -5, -5)

_TIME_FRIENDLY_TYPES: dict[TimeOfDay, frozenset[str]] = {
    TimeOfDay.morning: frozenset({"cafe", "bakery", "park", "gym", "library"}),
    TimeOfDay.afternoon: frozenset({
        "museum", "tourist_attraction", "shopping_mall", "restaurant", "park",
    }),
    TimeOfDay.evening: frozenset({"restaurant", "bar", "night_club", "movie_theater", "casino"}),
    TimeOfDay.night: frozenset({"bar", "night_club", "casino", "bowling_alley"}),
}


def _leaning_modifier(modifiers: tuple[int, int, int, int], leaning: Leaning) -> int:
    indoor, outdoor, mixed, _ = modifiers
    if leaning is Leaning.INDOOR:
        return indoor
    if leaning is Leaning.OUTDOOR:
        return outdoor
    return mixed


def score_suitability(
    leaning: Leaning,
    context: WeatherContext,
    outdoor_seating: bool = False,
) -> int:
    """
    Weather suitability of a venue, 0-100.

    Pure: depends only on the leaning, the weather context and whether the
    venue has outdoor seating.
    """
    score = float(BASELINE)
    modifiers = _REGIME_MODIFIERS[context.regime]
    score += _leaning_modifier(modifiers, leaning)
    if outdoor_seating:
        score += modifiers[3]

    if context.regime is Regime.POOR:
        stacks = context.poor_conditions
        score += _leaning_modifier(_POOR_CONDITION_MODIFIERS, leaning) * stacks
        if outdoor_seating:
            score += _POOR_CONDITION_MODIFIERS[3] * stacks

    elif context.regime is Regime.NEUTRAL:
        if context.cloud_cover > 80:
            if leaning is Leaning.OUTDOOR:
                score -= 5
            elif leaning is Leaning.MIXED:
                score -= 3
        if context.humidity > 75 and context.feels_like > 29:
            if leaning is Leaning.OUTDOOR:
                score -= 5
            elif leaning is Leaning.MIXED:
                score -= 3

    return int(round(max(0.0, min(100.0, score))))


def time_compatibility(
    types: frozenset[str],
    bucket: TimeOfDay,
    open_now: bool | None,
) -> float:
    if open_now is False:
        return 0.0
    score = 5.0
    if open_now is True:
        score += 2.0
    if types & _TIME_FRIENDLY_TYPES[bucket]:
        score += 3.0
    return score


def distance_score(distance_km: float | None) -> float:
    if distance_km is None:
        return 10.0
    if distance_km <= 0.5:
        return 20.0
    if distance_km <= 1:
        return 18.0
    if distance_km <= 2:
        return 15.0
    if distance_km <= 5:
        return 10.0
    if distance_km <= 10:
        return 5.0
    return 2.0


def popularity_score(rating: float | None, rating_count: int) -> float:
    """Rating scaled to 0-25, nudged by review volume."""
    if rating is None:
        return 0.0

    score = rating / 5 * 100
    if rating_count >= 1000:
        score += 10
    elif rating_count >= 500:
        score += 7
    elif rating_count >= 100:
        score += 5
    elif rating_count >= 50:
        score += 3
    elif rating_count < 10:
        score -= 10

    return max(0.0, min(100.0, score)) * 0.25


def novelty_score(rating: float | None, rating_count: int) -> float:
    if rating is None:
        return 5.0
    if rating_count < 50:
        return 10.0
    if rating_count < 200:
        return 7.0
    if rating_count < 1000:
        return 4.0
    return 1.0


def base_components(
    venue: Venue,
    leaning: Leaning,
    context: WeatherContext,
    open_now: bool | None = None,
) -> BaseComponents:
    suitability = score_suitability(leaning, context, bool(venue.outdoor_seating))
    return BaseComponents(
        base_score=suitability,
        weather_match=suitability * 0.2,
        time_compatibility=time_compatibility(venue.types, context.time_of_day, open_now),
        distance=distance_score(venue.distance_km),
        popularity=popularity_score(venue.rating, venue.rating_count),
        novelty=novelty_score(venue.rating, venue.rating_count),
    )
