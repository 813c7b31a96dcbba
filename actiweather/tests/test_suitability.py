import itertools

import pytest

from actiweather.scoring.suitability import (
    base_components,
    distance_score,
    novelty_score,
    popularity_score,
    score_suitability,
    time_compatibility,
)
from actiweather.venues.models import Leaning, Venue
from actiweather.weather.models import Regime, TimeOfDay, WeatherContext


def _context(regime: Regime, **overrides) -> WeatherContext:
    fields = {
        "regime": regime,
        "severity": 0.0,
        "time_of_day": TimeOfDay.afternoon,
        "summary": "test",
        "feels_like": 20.0,
        "cloud_cover": 0.0,
        "humidity": 50.0,
    }
    fields.update(overrides)
    return WeatherContext(**fields)


def test_perfect_weather_favours_outdoor():
    ctx = _context(Regime.PERFECT)
    assert score_suitability(Leaning.OUTDOOR, ctx) == 75
    assert score_suitability(Leaning.MIXED, ctx) == 60
    assert score_suitability(Leaning.INDOOR, ctx) == 40
    assert score_suitability(Leaning.MIXED, ctx, outdoor_seating=True) == 70


def test_good_weather():
    ctx = _context(Regime.GOOD)
    assert score_suitability(Leaning.OUTDOOR, ctx) == 65
    assert score_suitability(Leaning.INDOOR, ctx) == 45


def test_poor_conditions_stack():
    ctx = _context(Regime.POOR, heavy_precipitation=True, high_wind=True)
    assert score_suitability(Leaning.INDOOR, ctx) == 80
    assert score_suitability(Leaning.MIXED, ctx) == 30
    # 50 - 20 - 10 - 10*2 - 5*2 clamps to 0
    assert score_suitability(Leaning.OUTDOOR, ctx, outdoor_seating=True) == 0


def test_neutral_adjustments():
    ctx = _context(Regime.NEUTRAL, cloud_cover=90.0, humidity=80.0, feels_like=31.0)
    assert score_suitability(Leaning.INDOOR, ctx) == 55
    assert score_suitability(Leaning.OUTDOOR, ctx) == 45
    assert score_suitability(Leaning.MIXED, ctx) == 49


@pytest.mark.parametrize(
    "regime,leaning,seating,flags",
    [
        (regime, leaning, seating, flags)
        for regime, leaning, seating in itertools.product(Regime, Leaning, (False, True))
        for flags in ((), ("heavy_precipitation", "high_wind", "temperature_extreme", "low_visibility"))
    ],
)
def test_suitability_is_clamped(regime, leaning, seating, flags):
    ctx = _context(regime, cloud_cover=100.0, humidity=100.0, feels_like=45.0, **{f: True for f in flags})
    assert 0 <= score_suitability(leaning, ctx, seating) <= 100


def test_time_compatibility():
    assert time_compatibility(frozenset({"bar"}), TimeOfDay.night, False) == 0.0
    assert time_compatibility(frozenset({"bar"}), TimeOfDay.night, True) == 10.0
    assert time_compatibility(frozenset({"museum"}), TimeOfDay.night, None) == 5.0


def test_distance_bands():
    assert distance_score(0.3) == 20.0
    assert distance_score(1.0) == 18.0
    assert distance_score(4.0) == 10.0
    assert distance_score(25.0) == 2.0
    assert distance_score(None) == 10.0


def test_popularity_and_novelty():
    assert popularity_score(None, 500) == 0.0
    assert popularity_score(5.0, 2000) == 25.0
    assert popularity_score(4.0, 100) == pytest.approx(21.25)
    assert popularity_score(1.0, 3) == pytest.approx(2.5)
    assert novelty_score(None, 0) == 5.0
    assert novelty_score(4.5, 20) == 10.0
    assert novelty_score(4.5, 5000) == 1.0


def test_base_components_ranges():
    venue = Venue(id="v1", name="Hill Park", types=["park"], rating=4.6, rating_count=1200, distance_km=0.4)
    ctx = _context(Regime.PERFECT)
    components = base_components(venue, Leaning.OUTDOOR, ctx, open_now=None)
    assert components.base_score == 75
    assert components.weather_match == pytest.approx(15.0)
    assert components.time_compatibility == 8.0
    assert components.distance == 20.0
    assert 0 <= components.popularity <= 25
    assert components.novelty == 1.0
