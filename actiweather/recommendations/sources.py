"""
Collaborator interfaces.

The core never fetches weather, venues or profiles itself; callers plug in
implementations of these protocols. ``HaversineDistance`` is the default
distance calculator.
"""
from __future__ import annotations

import math
from typing import Any, Protocol

from ..venues.models import Coordinates
from ..weather.models import WeatherObservation

EARTH_RADIUS_KM = 6371.0


class WeatherSource(Protocol):
    def current(self, location: Coordinates) -> WeatherObservation: ...


class VenueSource(Protocol):
    def nearby(self, location: Coordinates, radius_km: float) -> list[dict[str, Any]]: ...


class ProfileStore(Protocol):
    """Read-only from the core's point of view."""

    def load(self, user_id: str) -> dict[str, Any] | None: ...


class DistanceCalculator(Protocol):
    def distance_km(self, origin: Coordinates, destination: Coordinates) -> float: ...


class HaversineDistance:
    """Great-circle distance on a spherical Earth."""

    def __init__(self, radius_km: float = EARTH_RADIUS_KM) -> None:
        self.radius_km = radius_km

    def distance_km(self, origin: Coordinates, destination: Coordinates) -> float:
        lat1, lat2 = math.radians(origin.lat), math.radians(destination.lat)
        d_lat = lat2 - lat1
        d_lng = math.radians(destination.lng - origin.lng)
        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
        )
        return self.radius_km * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
