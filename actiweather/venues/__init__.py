"""
Venue layer.

Responsibilities:
- Define the canonical Venue record handed in by the venue provider.
- Classify venues as indoor / outdoor / mixed and into activity categories.
- Resolve real-time open / closed status from opening-hours data.
"""
