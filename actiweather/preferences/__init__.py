"""
User preference layer.

Responsibilities:
- Define the user preference profile (importance weights, favorites,
  blacklist, mood, hard filters).
- Apply hard filters to candidate venues and collect per-reason stats.
- Validate and sanitise raw profile payloads.
"""
