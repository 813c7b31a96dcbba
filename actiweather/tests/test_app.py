from fastapi.testclient import TestClient

from actiweather.app import app

client = TestClient(app)

WEATHER = {
    "temperature": 4.0,
    "feels_like": 1.0,
    "wind_speed": 12.5,
    "cloud_cover": 100,
    "humidity": 92,
    "condition_code": 503,
    "timestamp": "2024-06-01T18:30:00Z",
    "timezone_offset": 3600,
}

VENUES = [
    {"id": "tate", "name": "Tate Modern", "types": ["museum", "art_gallery"], "rating": 4.6, "rating_count": 90000,
     "opening_hours": {"weekday_descriptions": [
         "Monday: 10:00 AM – 6:00 PM", "Tuesday: 10:00 AM – 6:00 PM", "Wednesday: 10:00 AM – 6:00 PM",
         "Thursday: 10:00 AM – 6:00 PM", "Friday: 10:00 AM – 10:00 PM", "Saturday: 10:00 AM – 10:00 PM",
         "Sunday: 10:00 AM – 6:00 PM"]},
     "location": {"lat": 51.5076, "lng": -0.0994}},
    {"id": "hyde", "name": "Hyde Park", "types": ["park"], "rating": 4.7, "rating_count": 150000,
     "location": {"lat": 51.5073, "lng": -0.1900}, "outdoor_seating": True},
    {"id": "pub", "name": "The Anchor", "types": ["bar", "restaurant"], "rating": 3.8, "rating_count": 4000, "price_tier": 4,
     "opening_hours": {"periods": [{"open": {"day": 0}}]},
     "location": {"lat": 51.5075, "lng": -0.0722}},
    {"name": "missing id"},
]

ORIGIN = {"lat": 51.5081, "lng": -0.0972}


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_moods():
    resp = client.get("/moods")
    assert resp.status_code == 200
    moods = resp.json()["moods"]
    assert "culture" in moods
    assert "museum" in moods["culture"]


def test_recommendations_in_a_storm():
    resp = client.post("/recommendations", json={
        "weather": WEATHER,
        "venues": VENUES,
        "user_location": ORIGIN,
        "rerank": False,
    })
    assert resp.status_code == 200
    body = resp.json()
    meta = body["metadata"]
    assert meta["regime"] == "POOR"
    assert meta["ai_reranking_applied"] is False
    assert meta["skipped_invalid"] == 1
    assert meta["filter_stats"]["reasons"] == {"too_far": 1}

    ids = [item["venue"]["id"] for item in body["recommendations"]]
    assert ids[0] == "tate"
    assert "hyde" not in ids
    top = body["recommendations"][0]
    assert top["open_now"] is True
    assert top["leaning"] == "INDOOR"
    assert top["category"] == "Culture & Entertainment"
    assert set(top["score"]) >= {"total", "confidence", "explanation", "base_score"}


def test_recommendations_respects_limit():
    resp = client.post("/recommendations", json={
        "weather": WEATHER, "venues": VENUES, "limit": 1, "rerank": False,
    })
    assert resp.status_code == 200
    assert len(resp.json()["recommendations"]) == 1


def test_recommendations_rejects_bad_profile():
    resp = client.post("/recommendations", json={
        "weather": WEATHER,
        "venues": VENUES,
        "profile": {"filters": {"max_radius_km": 500}},
    })
    assert resp.status_code == 422


def test_recommendations_requires_weather():
    resp = client.post("/recommendations", json={"venues": VENUES})
    assert resp.status_code == 422


def test_filter_preview():
    resp = client.post("/filters/preview", json={
        "weather": WEATHER,
        "venues": VENUES,
        "user_location": ORIGIN,
        "profile": {"blacklist": ["bar"]},
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["passed_ids"] == ["tate"]
    assert body["stats"]["reasons"] == {"too_far": 1, "blacklisted": 1}
    assert body["skipped_invalid"] == 1
    assert body["summary"][0] == "2 places hidden by filters"


def test_profile_validation():
    resp = client.post("/profiles/validate", json={
        "weights": {"weather": 0, "distance": 0, "ratings": 0, "price": 0, "novelty": 0},
        "favorites": ["park"],
        "blacklist": ["park"],
        "filters": {"max_radius_km": 100, "max_price_tier": 2, "min_rating": 4,
                    "open_now_only": True, "accessibility_required": False, "family_friendly": True},
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["report"]["valid"] is False
    assert "max_radius_km must be between 1 and 50" in body["report"]["errors"]
    assert body["profile"]["filters"]["max_radius_km"] == 50
    assert body["profile"]["favorites"] == []
    assert "Budget: $$" in body["summary"]
