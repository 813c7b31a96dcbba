from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    """Groq reranker settings; a blank key makes every rerank fail fast."""

    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    # seconds before the deterministic order is used instead
    timeout: float = float(os.getenv("RERANK_TIMEOUT", "8.0"))
    max_tokens: int = 1024
    temperature: float = 0.2
    max_candidates: int = int(os.getenv("RERANK_MAX_CANDIDATES", "50"))
    # one attempt only; a failed call falls back to the score order
    max_retries: int = 0
    enabled: bool = os.getenv("RERANK_ENABLED", "true").strip().lower() not in ("0", "false", "no", "off")


DEFAULT_LLM_CONFIG = LLMConfig()
