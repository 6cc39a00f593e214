"""LiteLLM-backed generative assessor (primary → fallback model chain)."""

from __future__ import annotations

import json
import logging
from typing import Any

from circuitbreaker import CircuitBreakerError

from agentready.analysis.llm._llm_call import guarded_completion
from agentready.analysis.llm.schemas import AIAssessment
from agentready.analysis.static.schemas import StaticAnalysisSummary
from agentready.config import Settings
from agentready.prompts import (
    REPOSITORY_ASSESSMENT_PROMPT,
    WEBSITE_ASSESSMENT_PROMPT,
    build_repository_prompt,
    build_website_prompt,
)
from agentready.resilience.errors import AIAssessmentError

logger = logging.getLogger(__name__)


def parse_assessment(raw_json: str) -> AIAssessment:
    """Parse and validate an assessor response.

    Raises ``json.JSONDecodeError`` or ``pydantic.ValidationError`` on
    malformed or out-of-range output.
    """
    data: Any = json.loads(raw_json)
    return AIAssessment.model_validate(data)


class LiteLLMAssessor:
    """Scores a static summary with an LLM.

    Every model in ``settings.litellm_model_chain`` is tried in order;
    the first parseable, in-contract answer wins. Retrying the whole
    assessment is the orchestrator's job, not this class's.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    async def assess_repository(
        self, summary: StaticAnalysisSummary
    ) -> AIAssessment:
        return await self._assess(
            REPOSITORY_ASSESSMENT_PROMPT,
            build_repository_prompt(summary),
            summary.target_url,
        )

    async def assess_website(
        self,
        summary: StaticAnalysisSummary,
        agentic_flows: dict[str, Any],
    ) -> AIAssessment:
        return await self._assess(
            WEBSITE_ASSESSMENT_PROMPT,
            build_website_prompt(summary, agentic_flows),
            summary.target_url,
        )

    async def _assess(
        self, system_prompt: str, user_prompt: str, target: str
    ) -> AIAssessment:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        last_error: Exception | None = None
        for model in self._settings.litellm_model_chain:
            try:
                result = await guarded_completion(
                    model, messages, self._settings.llm_timeout_seconds
                )
                return parse_assessment(result.content)
            except CircuitBreakerError as exc:
                logger.warning(
                    "event=circuit_open model=%s target=%s",
                    model,
                    target,
                )
                last_error = exc
            except Exception as exc:
                logger.warning(
                    "event=assessment_model_failed model=%s target=%s",
                    model,
                    target,
                    exc_info=True,
                )
                last_error = exc

        raise AIAssessmentError(
            f"All {len(self._settings.litellm_model_chain)} model(s) "
            f"failed to assess {target or 'target'}"
        ) from last_error
