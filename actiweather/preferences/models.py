from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator


class ImportanceWeights(BaseModel):
    """User-set importance per dimension; need not sum to 100."""

    weather: float = Field(default=30.0, ge=0.0, le=100.0)
    distance: float = Field(default=20.0, ge=0.0, le=100.0)
    ratings: float = Field(default=25.0, ge=0.0, le=100.0)
    price: float = Field(default=15.0, ge=0.0, le=100.0)
    novelty: float = Field(default=10.0, ge=0.0, le=100.0)


class FilterSettings(BaseModel):
    max_radius_km: float = Field(default=5.0, ge=1.0, le=50.0)
    max_price_tier: int = Field(default=4, ge=0, le=4)
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    open_now_only: bool = True
    accessibility_required: bool = False
    family_friendly: bool = False


class UserPreferenceProfile(BaseModel):
    weights: ImportanceWeights = Field(default_factory=ImportanceWeights)
    favorites: set[str] = Field(default_factory=set)
    blacklist: set[str] = Field(default_factory=set)
    active_mood: str | None = None
    filters: FilterSettings = Field(default_factory=FilterSettings)

    @field_validator("favorites", "blacklist", mode="before")
    @classmethod
    def _normalise_tags(cls, value):
        if value is None:
            return set()
        return {str(t).strip().lower() for t in value if str(t).strip()}

    @model_validator(mode="after")
    def _blacklist_wins(self) -> "UserPreferenceProfile":
        self.favorites = self.favorites - self.blacklist
        return self
