from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .models import Regime, TimeOfDay, WeatherContext, WeatherObservation

# Temperatures are feels-like °C, wind in m/s
TEMP_FREEZING = 0.0
TEMP_COLD = 8.0
TEMP_MILD_LOW = 18.0
TEMP_MILD_HIGH = 26.0
TEMP_WARM = 29.0
TEMP_HOT = 33.0

WIND_CALM = 3.0
WIND_BREEZY = 7.0
WIND_WINDY = 11.0

VISIBILITY_POOR = 1000.0
CLOUDS_NEAR_CLEAR = 25.0

_LIGHT_RAIN_CODES = frozenset({500, 520})
_LIGHT_SNOW_CODES = frozenset({600, 612, 615, 620})
_KNOWN_GROUPS = frozenset({2, 3, 5, 6, 7, 8})

_GROUP_LABELS = {
    2: "thunderstorm",
    3: "drizzle",
    5: "rain",
    6: "snow",
    7: "mist",
    8: "clouds",
}


def _is_known_code(code: int | None) -> bool:
    return code is not None and code // 100 in _KNOWN_GROUPS and 200 <= code <= 804


def is_precipitating(code: int | None) -> bool:
    return code is not None and code // 100 in (2, 3, 5, 6)


def is_heavy_precipitation(code: int | None) -> bool:
    """Thunderstorms, moderate/heavy rain and non-light snow."""
    if code is None:
        return False
    group = code // 100
    if group == 2:
        return True
    if group == 5:
        return code not in _LIGHT_RAIN_CODES
    if group == 6:
        return code not in _LIGHT_SNOW_CODES
    return False


def is_light_precipitation(code: int | None) -> bool:
    return is_precipitating(code) and not is_heavy_precipitation(code)


def weather_severity(observation: WeatherObservation) -> float:
    """
    Accumulate a 0-1 severity score from temperature, condition band,
    wind, humidity and visibility. Higher means more extreme.
    """
    severity = 0.0
    temp = observation.feels_like
    code = observation.condition_code if observation.condition_code is not None else 800

    if temp <= 0:
        severity += 0.3
    elif temp <= 5:
        severity += 0.2
    elif temp >= 38:
        severity += 0.3
    elif temp >= 32:
        severity += 0.2
    elif 18 <= temp <= 25:
        severity -= 0.1

    group = code // 100
    if group == 2:
        severity += 0.4
    elif group == 3:
        severity += 0.1
    elif group == 5:
        severity += 0.3 if code >= 502 else 0.2
    elif group == 6:
        severity += 0.3
    elif group == 7:
        severity += 0.5 if code == 781 else 0.15
    elif code > 800 and observation.cloud_cover > 75:
        severity += 0.1

    if observation.wind_speed > WIND_WINDY:
        severity += 0.2
    elif observation.wind_speed > 6.7:
        severity += 0.1

    if observation.humidity > 90 or observation.humidity < 20:
        severity += 0.1

    if observation.visibility < VISIBILITY_POOR:
        severity += 0.2

    return max(0.0, min(1.0, severity))


def _local_hour(observation: WeatherObservation) -> int:
    ts = observation.timestamp
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    offset = observation.timezone_offset or 0
    return (ts.astimezone(timezone.utc) + timedelta(seconds=offset)).hour


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def time_of_day(observation: WeatherObservation) -> TimeOfDay:
    if observation.sunrise is None or observation.sunset is None:
        hour = _local_hour(observation)
        if 6 <= hour < 12:
            return TimeOfDay.morning
        if 12 <= hour < 17:
            return TimeOfDay.afternoon
        if 17 <= hour < 21:
            return TimeOfDay.evening
        return TimeOfDay.night

    now = _as_utc(observation.timestamp)
    sunrise = _as_utc(observation.sunrise)
    sunset = _as_utc(observation.sunset)

    if now < sunrise:
        return TimeOfDay.night
    if now < sunrise + timedelta(hours=3):
        return TimeOfDay.morning
    if now < sunset - timedelta(hours=2):
        return TimeOfDay.afternoon
    if now < sunset:
        return TimeOfDay.evening
    return TimeOfDay.night


def weather_summary(observation: WeatherObservation, bucket: TimeOfDay | None = None) -> str:
    """Short human-readable line, e.g. ``"light rain, 12°C, evening"``."""
    bucket = bucket or time_of_day(observation)
    description = observation.description
    if not description:
        code = observation.condition_code
        if code == 800:
            description = "clear sky"
        elif _is_known_code(code):
            description = _GROUP_LABELS[code // 100]
        else:
            description = "variable conditions"
    return f"{description}, {observation.feels_like:.0f}°C, {bucket.value}"


def _decide_regime(observation: WeatherObservation) -> Regime:
    code = observation.condition_code
    if not _is_known_code(code):
        return Regime.NEUTRAL

    feels = observation.feels_like
    wind = observation.wind_speed

    if is_heavy_precipitation(code):
        return Regime.POOR

    if (
        feels < TEMP_FREEZING
        or feels > TEMP_HOT
        or wind >= WIND_WINDY
        or observation.visibility < VISIBILITY_POOR
    ):
        return Regime.POOR

    dry = not is_precipitating(code)
    near_clear = code in (800, 801) or observation.cloud_cover <= CLOUDS_NEAR_CLEAR

    if dry and TEMP_MILD_LOW <= feels <= TEMP_MILD_HIGH and wind < WIND_CALM and near_clear:
        return Regime.PERFECT

    if dry and TEMP_COLD <= feels <= TEMP_WARM and wind < WIND_BREEZY:
        return Regime.GOOD

    # light precipitation above the cold threshold lands here too
    return Regime.NEUTRAL


def classify_weather(observation: WeatherObservation) -> WeatherContext:
    """Derive the regime, severity, time bucket and summary for one observation."""
    bucket = time_of_day(observation)
    code = observation.condition_code
    return WeatherContext(
        regime=_decide_regime(observation),
        severity=weather_severity(observation),
        time_of_day=bucket,
        summary=weather_summary(observation, bucket),
        feels_like=observation.feels_like,
        cloud_cover=observation.cloud_cover,
        humidity=observation.humidity,
        heavy_precipitation=is_heavy_precipitation(code),
        light_precipitation=is_light_precipitation(code),
        high_wind=observation.wind_speed >= WIND_WINDY,
        temperature_extreme=(
            observation.feels_like < TEMP_FREEZING or observation.feels_like > TEMP_HOT
        ),
        low_visibility=observation.visibility < VISIBILITY_POOR,
    )
