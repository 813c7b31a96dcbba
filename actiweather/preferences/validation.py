from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..scoring.config import DEFAULT_PERSONALIZATION, PersonalizationConfig
from .models import FilterSettings, ImportanceWeights, UserPreferenceProfile

_WEIGHT_KEYS = ("weather", "distance", "ratings", "price", "novelty")
_FLAG_KEYS = ("open_now_only", "accessibility_required", "family_friendly")
_PRICE_SYMBOLS = ("Free", "$", "$$", "$$$", "$$$$")
_DEFAULT_TYPES = ("restaurant", "cafe", "park", "museum", "shopping_mall")


class ValidationReport(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _clamp(value: Any, low: float, high: float, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return max(low, min(high, number))


def validate_profile(raw: Any) -> ValidationReport:
    """Check a raw profile payload without modifying it."""
    errors: list[str] = []
    warnings: list[str] = []

    if not isinstance(raw, dict):
        return ValidationReport(valid=False, errors=["Profile must be an object"])

    weights = raw.get("weights")
    if isinstance(weights, dict):
        for key in _WEIGHT_KEYS:
            value = weights.get(key)
            if not _is_number(value) or not 0 <= value <= 100:
                errors.append(f"{key} weight must be between 0 and 100")
        total = sum(v for v in weights.values() if _is_number(v))
        if total == 0:
            warnings.append("All scoring weights are 0 - equal weighting will be used")
    else:
        errors.append("Missing weights")

    favorites = raw.get("favorites", [])
    blacklist = raw.get("blacklist", [])
    if not isinstance(favorites, (list, set, tuple)):
        errors.append("favorites must be a list")
    if not isinstance(blacklist, (list, set, tuple)):
        errors.append("blacklist must be a list")
    if isinstance(favorites, (list, set, tuple)) and isinstance(blacklist, (list, set, tuple)):
        overlap = set(favorites) & set(blacklist)
        if overlap:
            warnings.append(f"{len(overlap)} types are both favorited and blacklisted")

    mood = raw.get("active_mood")
    if mood is not None and not isinstance(mood, str):
        errors.append("active_mood must be a string or null")

    filters = raw.get("filters")
    if isinstance(filters, dict):
        radius = filters.get("max_radius_km")
        if not _is_number(radius) or not 1 <= radius <= 50:
            errors.append("max_radius_km must be between 1 and 50")
        tier = filters.get("max_price_tier")
        if not _is_number(tier) or not 0 <= tier <= 4:
            errors.append("max_price_tier must be between 0 and 4")
        rating = filters.get("min_rating")
        if not _is_number(rating) or not 0 <= rating <= 5:
            errors.append("min_rating must be between 0 and 5")
        for key in _FLAG_KEYS:
            if not isinstance(filters.get(key), bool):
                errors.append(f"{key} must be a boolean")
    else:
        errors.append("Missing filters")

    return ValidationReport(valid=not errors, errors=errors, warnings=warnings)


def sanitize_profile(raw: Any) -> UserPreferenceProfile:
    """
    Coerce a possibly stale or hand-edited profile into a valid one.

    Missing sections fall back to defaults, numbers are clamped into range
    and blacklisted tags are removed from favorites.
    """
    raw = raw if isinstance(raw, dict) else {}

    raw_weights = raw.get("weights") if isinstance(raw.get("weights"), dict) else {}
    default_weights = ImportanceWeights()
    weights = ImportanceWeights(**{
        key: _clamp(raw_weights.get(key, getattr(default_weights, key)), 0, 100, 0.0)
        for key in _WEIGHT_KEYS
    })

    raw_filters = raw.get("filters") if isinstance(raw.get("filters"), dict) else {}
    default_filters = FilterSettings()
    filters = FilterSettings(
        max_radius_km=_clamp(raw_filters.get("max_radius_km"), 1, 50, default_filters.max_radius_km),
        max_price_tier=int(_clamp(raw_filters.get("max_price_tier"), 0, 4, default_filters.max_price_tier)),
        min_rating=_clamp(raw_filters.get("min_rating"), 0, 5, default_filters.min_rating),
        **{
            key: bool(raw_filters.get(key, getattr(default_filters, key)))
            for key in _FLAG_KEYS
        },
    )

    def _tags(value: Any) -> set[str]:
        if not isinstance(value, (list, set, tuple)):
            return set()
        return {str(t) for t in value if isinstance(t, str)}

    mood = raw.get("active_mood")
    return UserPreferenceProfile(
        weights=weights,
        favorites=_tags(raw.get("favorites")),
        blacklist=_tags(raw.get("blacklist")),
        active_mood=mood if isinstance(mood, str) and mood else None,
        filters=filters,
    )


def preference_summary(profile: UserPreferenceProfile) -> list[str]:
    summary: list[str] = []
    filters = profile.filters

    if profile.active_mood:
        summary.append(f"Mood: {profile.active_mood}")
    if profile.favorites:
        summary.append(f"{len(profile.favorites)} favorite types")
    if profile.blacklist:
        summary.append(f"{len(profile.blacklist)} hidden types")
    if filters.max_price_tier < 4:
        summary.append(f"Budget: {_PRICE_SYMBOLS[filters.max_price_tier]}")
    if filters.max_radius_km != 5:
        summary.append(f"{filters.max_radius_km:g}km radius")
    if filters.min_rating > 0:
        summary.append(f"{filters.min_rating:g}+ stars")
    if filters.family_friendly:
        summary.append("Family-friendly")
    if filters.accessibility_required:
        summary.append("Accessible")
    return summary


def suggested_place_types(
    profile: UserPreferenceProfile,
    weather_suggestions: list[str] | None = None,
    config: PersonalizationConfig = DEFAULT_PERSONALIZATION,
) -> list[str]:
    """Venue types worth asking the venue provider for, best first."""
    suggested: list[str] = []

    def _add(tag: str) -> None:
        if tag not in suggested and tag not in profile.blacklist:
            suggested.append(tag)

    for tag in sorted(profile.favorites):
        _add(tag)
    for tag in sorted(config.mood_tags(profile.active_mood)):
        _add(tag)
    for tag in weather_suggestions or []:
        _add(tag)

    if len(suggested) < 3:
        for tag in _DEFAULT_TYPES:
            _add(tag)

    return suggested
