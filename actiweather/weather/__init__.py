"""
Weather layer.

Responsibilities:
- Hold the structured weather observation handed in by the weather provider.
- Classify it into a regime (PERFECT / GOOD / POOR / NEUTRAL).
- Compute a continuous severity score and a time-of-day bucket.
- Produce a short summary string for the LLM re-ranker.
"""
