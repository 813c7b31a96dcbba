from __future__ import annotations

import os
from dataclasses import dataclass

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..scoring.config import DEFAULT_PERSONALIZATION, PersonalizationConfig


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class PipelineConfig:
    rerank: bool = _env_flag("ACTIWEATHER_RERANK", "true")
    llm: LLMConfig = DEFAULT_LLM_CONFIG
    personalization: PersonalizationConfig = DEFAULT_PERSONALIZATION


DEFAULT_PIPELINE_CONFIG = PipelineConfig()
