"""Environment-based configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from agentready.logging_config import resolve_level

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # LLM Provider
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # Model chain (first = primary, rest = fallbacks tried in order)
    litellm_model_chain: Annotated[list[str], NoDecode] = [
        "openai/gpt-4.1-mini",
        "anthropic/claude-sonnet-4-5-20250929",
    ]
    llm_timeout_seconds: int = 60

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    # Assessment pipeline
    assessment_max_retries: int = 2
    assessment_fallback_to_static: bool = True
    assessment_enable_validation: bool = True
    assessment_require_alignment: bool = False
    assessment_attempt_timeout_seconds: float | None = 90.0
    retry_initial_wait: float = 1.0
    retry_max_wait: float = 10.0

    # Scoring
    static_weight: float = 0.3
    ai_weight: float = 0.7
    max_score_variance: float = 15.0
    min_confidence_threshold: float = 60.0

    @field_validator("litellm_model_chain", mode="before")
    @classmethod
    def _parse_chain(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("litellm_model_chain")
    @classmethod
    def _validate_chain(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError(
                "litellm_model_chain must contain at least one model"
            )
        seen: set[str] = set()
        dupes: list[str] = []
        for m in v:
            if m in seen:
                dupes.append(m)
            seen.add(m)
        if dupes:
            logger.warning(
                "Duplicate models in LITELLM_MODEL_CHAIN: %s",
                ", ".join(dupes),
            )
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        resolve_level(v)
        return v.strip().upper()

    @field_validator("assessment_max_retries")
    @classmethod
    def _validate_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("assessment_max_retries must be >= 0")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }
