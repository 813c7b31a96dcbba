from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from ..weather.models import WeatherObservation
from ..weather.regime import WIND_WINDY, is_precipitating
from .models import Leaning

INDOOR_TYPES: frozenset[str] = frozenset({
    "museum", "movie_theater", "library", "aquarium", "shopping_mall", "gym",
    "bowling_alley", "spa", "art_gallery", "performing_arts_theater",
    "casino", "beauty_salon", "hair_care", "nail_salon", "skating_rink",
    "amusement_center", "book_store", "clothing_store", "department_store",
    "electronics_store", "furniture_store", "home_goods_store", "jewelry_store",
    "shoe_store", "pet_store", "restaurant", "cafe", "bar", "night_club",
    "bakery", "convention_center",
})

OUTDOOR_TYPES: frozenset[str] = frozenset({
    "park", "hiking_area", "campground", "zoo", "amusement_park", "stadium",
    "golf_course", "playground", "garden", "picnic_ground", "marina", "beach",
    "swimming_pool", "viewpoint", "plaza", "natural_feature", "trail",
    "dog_park", "rv_park",
})


class ActivityCategory(str, Enum):
    OUTDOOR_ACTIVE = "Outdoor Active"
    OUTDOOR_RELAX = "Outdoor Relax"
    INDOOR_ACTIVE = "Indoor Active"
    INDOOR_RELAX = "Indoor Relax"
    FOOD_DRINK = "Food & Drink"
    SHOPPING = "Shopping"
    CULTURE_ENTERTAINMENT = "Culture & Entertainment"


CATEGORY_TYPES: dict[ActivityCategory, frozenset[str]] = {
    ActivityCategory.OUTDOOR_ACTIVE: frozenset({
        "park", "hiking_area", "tourist_attraction", "stadium", "playground",
        "golf_course",
    }),
    ActivityCategory.OUTDOOR_RELAX: frozenset({
        "park", "tourist_attraction", "zoo", "amusement_park", "garden",
        "picnic_ground", "plaza", "marina", "campground",
    }),
    ActivityCategory.INDOOR_ACTIVE: frozenset({
        "gym", "bowling_alley", "amusement_center", "skating_rink",
    }),
    ActivityCategory.INDOOR_RELAX: frozenset({
        "movie_theater", "library", "cafe", "spa", "art_gallery", "museum",
        "book_store", "beauty_salon", "hair_care", "nail_salon", "aquarium",
    }),
    ActivityCategory.FOOD_DRINK: frozenset({
        "restaurant", "cafe", "bar", "meal_takeaway", "bakery", "food_court",
        "ice_cream_shop",
    }),
    ActivityCategory.SHOPPING: frozenset({
        "shopping_mall", "book_store", "clothing_store", "department_store",
        "electronics_store", "furniture_store", "home_goods_store",
        "jewelry_store", "shoe_store", "pet_store", "convenience_store",
        "supermarket", "liquor_store",
    }),
    ActivityCategory.CULTURE_ENTERTAINMENT: frozenset({
        "museum", "art_gallery", "library", "movie_theater", "aquarium", "zoo",
        "tourist_attraction", "casino", "night_club", "performing_arts_theater",
        "amusement_park", "stadium", "convention_center",
    }),
}

# A cafe that is also a book store is Food & Drink, a museum in a park is
# Culture & Entertainment.
CATEGORY_PRIORITY: tuple[ActivityCategory, ...] = (
    ActivityCategory.FOOD_DRINK,
    ActivityCategory.CULTURE_ENTERTAINMENT,
    ActivityCategory.INDOOR_ACTIVE,
    ActivityCategory.INDOOR_RELAX,
    ActivityCategory.OUTDOOR_ACTIVE,
    ActivityCategory.OUTDOOR_RELAX,
    ActivityCategory.SHOPPING,
)

_ALWAYS_SUITABLE = (
    ActivityCategory.FOOD_DRINK,
    ActivityCategory.SHOPPING,
    ActivityCategory.CULTURE_ENTERTAINMENT,
    ActivityCategory.INDOOR_RELAX,
    ActivityCategory.INDOOR_ACTIVE,
)


def classify_leaning(types: Iterable[str]) -> Leaning:
    tags = set(types)
    if tags & INDOOR_TYPES:
        return Leaning.INDOOR
    if tags & OUTDOOR_TYPES:
        return Leaning.OUTDOOR
    return Leaning.MIXED


def categorize(types: Iterable[str]) -> ActivityCategory | None:
    """Return the highest-priority category matching any of the tags."""
    tags = set(types)
    for category in CATEGORY_PRIORITY:
        if tags & CATEGORY_TYPES[category]:
            return category
    return None


def place_types_for_category(category: ActivityCategory) -> list[str]:
    return sorted(CATEGORY_TYPES.get(category, ()))


def suitable_categories(observation: WeatherObservation | None) -> list[ActivityCategory]:
    """Activity categories that make sense under the observed weather."""
    if observation is None:
        return []

    suitable: list[ActivityCategory] = list(_ALWAYS_SUITABLE)
    if is_precipitating(observation.condition_code):
        return suitable

    feels = observation.feels_like
    code = observation.condition_code
    clouds = observation.cloud_cover
    windy = observation.wind_speed > WIND_WINDY

    active = relax = False
    if not windy and 15 <= feels <= 30:
        active = True
    elif not windy and feels > 30 and code == 800:
        active = True
    elif not windy and 5 <= feels < 15 and (code == 800 or clouds < 50):
        active = True

    if not windy and 15 <= feels <= 25:
        relax = True
    elif 25 < feels <= 30 and (code == 800 or clouds < 75):
        relax = True
    elif not windy and 5 <= feels < 15 and code == 800:
        relax = True

    if code is not None and code // 100 == 7 and observation.visibility < 1000:
        active = False
    if feels > 35 or feels < 0:
        active = relax = False

    if active:
        suitable.append(ActivityCategory.OUTDOOR_ACTIVE)
    if relax:
        suitable.append(ActivityCategory.OUTDOOR_RELAX)
    return suitable
