import pytest

from actiweather.preferences.models import FilterSettings, ImportanceWeights, UserPreferenceProfile
from actiweather.scoring.config import PersonalizationConfig
from actiweather.scoring.models import BaseComponents, Confidence
from actiweather.scoring.personalization import (
    confidence_for,
    normalize_weights,
    personalize,
    severity_adjusted_weights,
)
from actiweather.venues.models import Venue

COMPONENTS = BaseComponents(
    base_score=75,
    weather_match=15.0,
    time_compatibility=8.0,
    distance=18.0,
    popularity=22.0,
    novelty=4.0,
)

CAFE = Venue(id="c1", name="Corner Cafe", types=["cafe"], rating=4.5, rating_count=400, price_tier=2)
BAR = Venue(id="b1", name="Late Bar", types=["bar"], rating=4.5, rating_count=400, price_tier=2)


def test_zero_weights_fall_back_to_equal():
    weights = normalize_weights(ImportanceWeights(weather=0, distance=0, ratings=0, price=0, novelty=0))
    assert weights == {dim: pytest.approx(0.2) for dim in weights}
    assert set(weights) == {"weather", "distance", "ratings", "price", "novelty"}

    profile = UserPreferenceProfile(weights=ImportanceWeights(weather=0, distance=0, ratings=0, price=0, novelty=0))
    breakdown = personalize(COMPONENTS, CAFE, profile)
    assert 0 <= breakdown.total <= 100


def test_default_weights_keep_components():
    breakdown = personalize(COMPONENTS, CAFE, UserPreferenceProfile())
    assert breakdown.weather_component == pytest.approx(23.0)
    assert breakdown.distance_component == pytest.approx(18.0)
    assert breakdown.ratings_component == pytest.approx(22.0)
    # tier 2 of 4 is half the price points
    assert breakdown.price_component == pytest.approx(7.5)
    assert breakdown.total == round(23 + 18 + 22 + 7.5 + 4)


def test_heavier_weight_amplifies_dimension():
    profile = UserPreferenceProfile(weights=ImportanceWeights(weather=60, distance=10, ratings=10, price=10, novelty=10))
    breakdown = personalize(COMPONENTS, CAFE, profile)
    assert breakdown.weather_component > 23.0
    assert breakdown.distance_component < 18.0
    assert "Weather heavily weighted" in breakdown.explanation


def test_over_budget_penalty():
    profile = UserPreferenceProfile(filters=FilterSettings(max_price_tier=1))
    breakdown = personalize(COMPONENTS, CAFE, profile)
    assert breakdown.price_component == -20.0
    assert any("Over budget" in line for line in breakdown.explanation)


def test_free_only_budget():
    free = CAFE.model_copy(update={"price_tier": 0})
    profile = UserPreferenceProfile(filters=FilterSettings(max_price_tier=0))
    assert personalize(COMPONENTS, free, profile).price_component == pytest.approx(15.0)


def test_favorite_and_mood_bonuses():
    profile = UserPreferenceProfile(favorites={"cafe"}, active_mood="relaxation")
    breakdown = personalize(COMPONENTS, CAFE, profile)
    assert breakdown.favorite_bonus == 15.0
    assert breakdown.mood_bonus == 10.0
    plain = personalize(COMPONENTS, CAFE, UserPreferenceProfile())
    assert breakdown.total > plain.total


def test_mood_presets_come_from_config():
    config = PersonalizationConfig(mood_presets={"cozy": frozenset({"cafe"})})
    profile = UserPreferenceProfile(active_mood="cozy")
    assert personalize(COMPONENTS, CAFE, profile, config=config).mood_bonus == 10.0
    assert personalize(COMPONENTS, CAFE, profile).mood_bonus == 0.0


def test_closed_and_family_penalties():
    profile = UserPreferenceProfile(filters=FilterSettings(family_friendly=True))
    breakdown = personalize(COMPONENTS, BAR, profile, open_now=False)
    assert breakdown.penalties == 50.0
    assert "Currently closed (-30)" in breakdown.explanation
    assert "Not family-friendly (-20)" in breakdown.explanation

    relaxed = UserPreferenceProfile(filters=FilterSettings(open_now_only=False))
    assert personalize(COMPONENTS, BAR, relaxed, open_now=False).penalties == 0.0


def test_total_is_clamped():
    profile = UserPreferenceProfile(
        favorites={"cafe"},
        active_mood="foodie",
        weights=ImportanceWeights(weather=0, distance=0, ratings=100, price=0, novelty=0),
    )
    assert personalize(COMPONENTS, CAFE, profile).total == 100

    gloomy = BaseComponents(base_score=0, weather_match=0, time_compatibility=0, distance=2, popularity=0, novelty=1)
    harsh = UserPreferenceProfile(filters=FilterSettings(max_price_tier=0, family_friendly=True))
    assert personalize(gloomy, BAR, harsh, open_now=False).total == 0


@pytest.mark.parametrize("total,expected", [(90, Confidence.high), (75, Confidence.high), (60, Confidence.medium), (49, Confidence.low)])
def test_confidence_tiers(total, expected):
    assert confidence_for(total) is expected


def test_severity_shifts_weight_to_weather():
    calm = severity_adjusted_weights(ImportanceWeights(), 0.0)
    assert calm == normalize_weights(ImportanceWeights())

    moderate = severity_adjusted_weights(ImportanceWeights(), 0.35)
    extreme = severity_adjusted_weights(ImportanceWeights(), 0.7)
    assert calm["weather"] < moderate["weather"] < extreme["weather"]
    assert extreme["weather"] == pytest.approx(0.6)
    assert severity_adjusted_weights(ImportanceWeights(), 1.0) == pytest.approx(extreme)
    assert sum(moderate.values()) == pytest.approx(1.0)
    assert moderate["distance"] / moderate["ratings"] == pytest.approx(20 / 25)


def test_extreme_weather_amplifies_weather_component():
    calm = personalize(COMPONENTS, CAFE, UserPreferenceProfile())
    storm = personalize(COMPONENTS, CAFE, UserPreferenceProfile(), severity=0.9)

    # weather share doubles from 30% to 60%, the rest shrink to 4/7
    assert storm.weather_component == pytest.approx(46.0)
    assert storm.distance_component == pytest.approx(18.0 * 4 / 7, abs=0.01)
    assert "Extreme weather, weather fit prioritized" in storm.explanation
    assert "Extreme weather, weather fit prioritized" not in calm.explanation
