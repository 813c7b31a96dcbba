"""
Scoring layer.

Responsibilities:
- Score how well a venue suits the current weather (0-100).
- Break that down into weather, time, distance, popularity and novelty parts.
- Re-weight the parts with the user's importance weights, then add
  favorite / mood bonuses and closed / family penalties.
"""
