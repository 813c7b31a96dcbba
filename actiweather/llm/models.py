from __future__ import annotations

from pydantic import BaseModel, Field


class RerankCandidate(BaseModel):
    id: str
    name: str
    address: str | None = None
    rating: float | None = None
    review_count: int = 0
    price_tier: int | None = None
    types: list[str] = Field(default_factory=list)
    open_now: bool | None = None
    score: float = 0.0


class RerankRequest(BaseModel):
    venues: list[RerankCandidate]
    weather_summary: str
    user_context: str | None = None


class RerankResponse(BaseModel):
    venue_ids: list[str]
    success: bool
    error: str | None = None
