"""
Hard preference filters.

Each filter is an independent predicate; the chain short-circuits on the
first failure only to decide which single reason gets reported.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field

from ..venues.hours import resolve_open_status
from ..venues.models import Venue
from .models import UserPreferenceProfile

ALWAYS_ACCESSIBLE_TYPES: frozenset[str] = frozenset({
    "park", "playground", "hiking_area", "beach", "viewpoint",
    "tourist_attraction", "natural_feature", "campground", "dog_park",
    "garden", "plaza", "picnic_ground", "marina", "trail", "monument",
    "landmark", "stadium", "sports_complex", "golf_course",
})

NOT_FAMILY_FRIENDLY_TYPES: frozenset[str] = frozenset({
    "bar", "night_club", "casino", "liquor_store",
})


@dataclass(frozen=True)
class FilterResult:
    passed: bool
    reason: str | None = None


@dataclass(frozen=True)
class FilterInputs:
    distance_km: float | None = None
    timezone_offset: int | None = None
    at: datetime | None = None


class FilterStats(BaseModel):
    total: int = 0
    passed: int = 0
    filtered: int = 0
    reasons: dict[str, int] = Field(default_factory=dict)


def is_always_accessible(venue: Venue) -> bool:
    return bool(venue.types & ALWAYS_ACCESSIBLE_TYPES)


def is_family_friendly(venue: Venue) -> bool:
    return not (venue.types & NOT_FAMILY_FRIENDLY_TYPES)


def _not_blacklisted(venue: Venue, profile: UserPreferenceProfile, inputs: FilterInputs) -> bool:
    return not (venue.types & profile.blacklist)


def _meets_rating(venue: Venue, profile: UserPreferenceProfile, inputs: FilterInputs) -> bool:
    floor = profile.filters.min_rating
    if floor <= 0:
        return True
    return venue.rating is not None and venue.rating >= floor


def _within_budget(venue: Venue, profile: UserPreferenceProfile, inputs: FilterInputs) -> bool:
    if venue.price_tier is None:
        return True
    return venue.price_tier <= profile.filters.max_price_tier


def _within_radius(venue: Venue, profile: UserPreferenceProfile, inputs: FilterInputs) -> bool:
    distance = inputs.distance_km if inputs.distance_km is not None else venue.distance_km
    if distance is None:
        return True
    return distance <= profile.filters.max_radius_km


def _open_now(venue: Venue, profile: UserPreferenceProfile, inputs: FilterInputs) -> bool:
    if not profile.filters.open_now_only or is_always_accessible(venue):
        return True
    status = resolve_open_status(
        venue.opening_hours,
        venue.business_status,
        inputs.timezone_offset,
        inputs.at,
    )
    return status is True


def _accessible(venue: Venue, profile: UserPreferenceProfile, inputs: FilterInputs) -> bool:
    if not profile.filters.accessibility_required:
        return True
    return venue.accessibility.wheelchair_accessible_entrance is True


def _family_friendly(venue: Venue, profile: UserPreferenceProfile, inputs: FilterInputs) -> bool:
    if not profile.filters.family_friendly:
        return True
    return is_family_friendly(venue)


FilterCheck = Callable[[Venue, UserPreferenceProfile, FilterInputs], bool]

FILTER_CHAIN: tuple[tuple[str, FilterCheck], ...] = (
    ("blacklisted", _not_blacklisted),
    ("rating_too_low", _meets_rating),
    ("too_expensive", _within_budget),
    ("too_far", _within_radius),
    ("closed", _open_now),
    ("not_accessible", _accessible),
    ("not_family_friendly", _family_friendly),
)


def apply_filters(
    venue: Venue,
    profile: UserPreferenceProfile,
    distance_km: float | None = None,
    *,
    timezone_offset: int | None = None,
    at: datetime | None = None,
    chain: Sequence[tuple[str, FilterCheck]] = FILTER_CHAIN,
) -> FilterResult:
    inputs = FilterInputs(distance_km=distance_km, timezone_offset=timezone_offset, at=at)
    for reason, check in chain:
        if not check(venue, profile, inputs):
            return FilterResult(passed=False, reason=reason)
    return FilterResult(passed=True)


def filter_venues(
    venues: Iterable[Venue],
    profile: UserPreferenceProfile,
    distances: Mapping[str, float] | None = None,
    *,
    timezone_offset: int | None = None,
    at: datetime | None = None,
) -> tuple[list[Venue], FilterStats]:
    stats = FilterStats()
    kept: list[Venue] = []

    for venue in venues:
        stats.total += 1
        distance = distances.get(venue.id) if distances else None
        result = apply_filters(
            venue, profile, distance, timezone_offset=timezone_offset, at=at,
        )
        if result.passed:
            stats.passed += 1
            kept.append(venue)
        else:
            stats.filtered += 1
            stats.reasons[result.reason] = stats.reasons.get(result.reason, 0) + 1

    return kept, stats


_REASON_LABELS: dict[str, str] = {
    "blacklisted": "blacklisted",
    "rating_too_low": "below rating minimum",
    "too_expensive": "exceed budget",
    "too_far": "too far away",
    "closed": "currently closed",
    "not_accessible": "not wheelchair accessible",
    "not_family_friendly": "not family-friendly",
}


def filter_summary(stats: FilterStats) -> list[str]:
    """Human-readable lines describing what the filters removed."""
    if stats.filtered == 0:
        return ["All places match your preferences"]

    summary = [f"{stats.filtered} places hidden by filters"]
    for reason, label in _REASON_LABELS.items():
        count = stats.reasons.get(reason)
        if count:
            summary.append(f"{count} {label}")
    return summary
