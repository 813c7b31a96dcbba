from datetime import datetime, timedelta, timezone

import pytest

from actiweather.venues.hours import open_from_description, open_from_periods, resolve_open_status
from actiweather.venues.models import BusinessStatus, DayTime, OpeningHours, OpeningPeriod

# 2024-06-01 is a Saturday (day 6 with Sunday = 0)
SATURDAY = datetime(2024, 6, 1, tzinfo=timezone.utc)

ALWAYS_OPEN = OpeningHours(periods=(OpeningPeriod(open=DayTime(day=0)),))

OVERNIGHT = OpeningHours(periods=tuple(
    OpeningPeriod(open=DayTime(day=d, hour=18), close=DayTime(day=(d + 1) % 7, hour=2))
    for d in range(7)
))

OFFICE_HOURS = OpeningHours(periods=tuple(
    OpeningPeriod(open=DayTime(day=d, hour=9), close=DayTime(day=d, hour=17))
    for d in range(1, 6)
))

WEEKDAY_TEXT = (
    "Monday: 9:00 AM – 5:00 PM",
    "Tuesday: 9:00 AM – 5:00 PM",
    "Wednesday: 9:00 AM – 5:00 PM",
    "Thursday: 9:00 AM – 5:00 PM",
    "Friday: 9:00 AM – 11:00 PM",
    "Saturday: 6:00 PM – 2:00 AM",
    "Sunday: Closed",
)


@pytest.mark.parametrize("hours_later", [0, 3, 9, 13, 20, 27, 50, 100, 150])
def test_single_open_period_is_always_open(hours_later):
    at = SATURDAY + timedelta(hours=hours_later, minutes=17)
    assert resolve_open_status(ALWAYS_OPEN, timezone_offset=0, at=at) is True
    assert resolve_open_status(ALWAYS_OPEN, timezone_offset=-18000, at=at) is True


def test_always_open_without_timezone():
    assert resolve_open_status(ALWAYS_OPEN, at=SATURDAY) is True


def test_no_hours_data_is_unknown():
    assert resolve_open_status(OpeningHours(), timezone_offset=0, at=SATURDAY) is None
    assert resolve_open_status(None) is None


def test_overnight_span():
    assert resolve_open_status(OVERNIGHT, timezone_offset=0, at=SATURDAY + timedelta(hours=1)) is True
    assert resolve_open_status(OVERNIGHT, timezone_offset=0, at=SATURDAY + timedelta(hours=10)) is False
    assert resolve_open_status(OVERNIGHT, timezone_offset=0, at=SATURDAY + timedelta(hours=23)) is True


def test_overnight_span_respects_offset():
    # 08:00 UTC is 01:00 at UTC-7
    at = SATURDAY + timedelta(hours=8)
    assert resolve_open_status(OVERNIGHT, timezone_offset=-7 * 3600, at=at) is True
    assert resolve_open_status(OVERNIGHT, timezone_offset=2 * 3600, at=at) is False


def test_same_day_span():
    monday_ten = SATURDAY + timedelta(days=2, hours=10)
    monday_six_pm = SATURDAY + timedelta(days=2, hours=18)
    assert resolve_open_status(OFFICE_HOURS, timezone_offset=0, at=monday_ten) is True
    assert resolve_open_status(OFFICE_HOURS, timezone_offset=0, at=monday_six_pm) is False
    assert resolve_open_status(OFFICE_HOURS, timezone_offset=0, at=SATURDAY + timedelta(hours=10)) is False


def test_computed_value_beats_provider_flag(caplog):
    hours = OFFICE_HOURS.model_copy(update={"open_now": True})
    with caplog.at_level("WARNING"):
        result = resolve_open_status(hours, timezone_offset=0, at=SATURDAY + timedelta(hours=10))
    assert result is False
    assert "Provider says open" in caplog.text


def test_closed_business_status():
    for status in (BusinessStatus.CLOSED_TEMPORARILY, BusinessStatus.CLOSED_PERMANENTLY):
        assert resolve_open_status(ALWAYS_OPEN, status, 0, SATURDAY) is False


def test_bare_provider_flags():
    assert resolve_open_status(OpeningHours(open_now=True), timezone_offset=0, at=SATURDAY) is None
    assert resolve_open_status(OpeningHours(open_now=False)) is False


def test_missing_timezone_skips_periods():
    assert resolve_open_status(OFFICE_HOURS, at=SATURDAY + timedelta(hours=10)) is None


def test_weekday_descriptions():
    hours = OpeningHours(weekday_descriptions=WEEKDAY_TEXT)
    assert resolve_open_status(hours, timezone_offset=0, at=SATURDAY + timedelta(hours=20)) is True
    assert resolve_open_status(hours, timezone_offset=0, at=SATURDAY + timedelta(hours=12)) is False
    # Sunday 01:00 reads Sunday's line, which is closed
    assert resolve_open_status(hours, timezone_offset=0, at=SATURDAY + timedelta(hours=25)) is False
    monday_noon = SATURDAY + timedelta(days=2, hours=12)
    assert resolve_open_status(hours, timezone_offset=0, at=monday_noon) is True


def test_description_literals_and_fallthrough():
    assert open_from_description(("Saturday: Open 24 hours",), 6, 600) is True
    assert open_from_description(("Saturday: by appointment",), 6, 600) is None
    assert open_from_description(("Monday: 9:00 AM - 5:00 PM",), 6, 600) is None
    assert open_from_description((), 6, 600) is None


def test_open_from_periods_without_periods():
    assert open_from_periods((), 3, 600) is None
