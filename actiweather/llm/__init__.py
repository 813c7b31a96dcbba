"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build a weather-aware prompt from the top scored venues.
- Ask Groq to reorder them, bounded by a timeout and a caller cancel signal.
- Fall back to the deterministic order when the LLM is unavailable or
  returns invalid output.
"""
