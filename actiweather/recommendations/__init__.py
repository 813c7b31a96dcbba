"""
Recommendation pipeline.

Responsibilities:
- Accept a weather observation, raw venue records and a preference profile.
- Validate venues, attach distances, classify the weather once per request.
- Filter, score and personalize venues, then sort them deterministically.
- Optionally let the Groq reranker reorder the top page.
- Return structured recommendations plus pipeline metadata for the API.
"""
