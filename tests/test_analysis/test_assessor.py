"""Tests for the LiteLLM-backed assessor and its output contract."""

from __future__ import annotations

import json
import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from circuitbreaker import CircuitBreakerMonitor
from pydantic import ValidationError
from tenacity import wait_none

from agentready.analysis.llm._llm_call import (
    _breaker_registry,
    guarded_completion,
)
from agentready.analysis.llm.assessor import LiteLLMAssessor, parse_assessment
from agentready.analysis.llm.schemas import AIAssessment
from agentready.analysis.static.website import website_to_static
from agentready.analysis.static.schemas import WebsiteAnalysis
from agentready.config import Settings
from agentready.constants import Category
from agentready.resilience.errors import AIAssessmentError
from tests.conftest import make_summary

_VALID = {
    "readiness_score": 72,
    "categories": {
        "documentation": 16,
        "instruction_clarity": 14,
        "workflow_automation": 12,
        "risk_compliance": 14,
        "integration_structure": 12,
        "file_size_optimization": 10,
    },
    "findings": ["README explains setup"],
    "recommendations": ["Add AGENTS.md"],
    "confidence": {"documentation": 85, "overall": 75},
}


@pytest.fixture(autouse=True)
def _reset_breakers() -> Any:
    _breaker_registry.clear()
    for cb in CircuitBreakerMonitor.get_circuits():
        cb.reset()  # type: ignore[union-attr]
    original_wait = guarded_completion.retry.wait  # type: ignore[union-attr]
    guarded_completion.retry.wait = wait_none()  # type: ignore[union-attr]
    yield
    guarded_completion.retry.wait = original_wait  # type: ignore[union-attr]


def _response(content: str) -> MagicMock:
    resp = MagicMock()
    resp.choices = [MagicMock(message=MagicMock(content=content))]
    resp.usage = MagicMock(prompt_tokens=100, completion_tokens=50)
    return resp


# ── parse_assessment ─────────────────────────────────────────


class TestParseAssessment:
    def test_valid_payload(self) -> None:
        result = parse_assessment(json.dumps(_VALID))
        assert result.categories.documentation == 16
        assert result.confidence_for(Category.DOCUMENTATION) == 85
        assert result.confidence_for(Category.RISK_COMPLIANCE) is None

    def test_camel_case_payload(self) -> None:
        payload = {
            "readinessScore": 60,
            "categories": {
                "documentation": 10,
                "instructionClarity": 10,
                "workflowAutomation": 10,
                "riskCompliance": 10,
                "integrationStructure": 10,
                "fileSizeOptimization": 10,
            },
            "confidence": {"instructionClarity": 55},
            "categoryFindings": {"riskCompliance": ["No SECURITY.md"]},
        }
        result = parse_assessment(json.dumps(payload))
        assert result.confidence_for(Category.INSTRUCTION_CLARITY) == 55
        assert result.category_findings[Category.RISK_COMPLIANCE] == [
            "No SECURITY.md"
        ]

    def test_category_out_of_range_rejected(self) -> None:
        bad = json.loads(json.dumps(_VALID))
        bad["categories"]["documentation"] = 25
        with pytest.raises(ValidationError):
            parse_assessment(json.dumps(bad))

    def test_confidence_out_of_range_rejected(self) -> None:
        bad = dict(_VALID, confidence={"documentation": 140})
        with pytest.raises(ValidationError, match="0-100"):
            parse_assessment(json.dumps(bad))

    def test_sub_score_out_of_range_rejected(self) -> None:
        bad = dict(_VALID, sub_scores={"documentation": {"readme": 21}})
        with pytest.raises(ValidationError, match="0-20"):
            AIAssessment.model_validate(bad)

    def test_invalid_json_rejected(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            parse_assessment("not json")


# ── LiteLLMAssessor ──────────────────────────────────────────


class TestLiteLLMAssessor:
    async def test_primary_model_success(self) -> None:
        settings = Settings(litellm_model_chain=["model-a", "model-b"])
        with patch(
            "agentready.analysis.llm._llm_call._acompletion",
            new_callable=AsyncMock,
            return_value=_response(json.dumps(_VALID)),
        ) as mock_call:
            result = await LiteLLMAssessor(settings).assess_repository(
                make_summary()
            )
        assert result.readiness_score == 72
        assert mock_call.await_count == 1
        assert mock_call.await_args.kwargs["model"] == "model-a"

    async def test_falls_back_to_next_model(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        settings = Settings(litellm_model_chain=["model-a", "model-b"])
        with (
            patch(
                "agentready.analysis.llm._llm_call._acompletion",
                new_callable=AsyncMock,
                side_effect=[
                    ConnectionError("API down"),
                    _response(json.dumps(_VALID)),
                ],
            ) as mock_call,
            caplog.at_level(
                logging.WARNING, logger="agentready.analysis.llm.assessor"
            ),
        ):
            result = await LiteLLMAssessor(settings).assess_repository(
                make_summary()
            )
        assert result.categories.documentation == 16
        assert mock_call.await_args.kwargs["model"] == "model-b"
        assert "event=assessment_model_failed model=model-a" in caplog.text

    async def test_malformed_output_tries_next_model(self) -> None:
        settings = Settings(litellm_model_chain=["model-a", "model-b"])
        with patch(
            "agentready.analysis.llm._llm_call._acompletion",
            new_callable=AsyncMock,
            side_effect=[
                _response('{"readiness_score": 900}'),
                _response(json.dumps(_VALID)),
            ],
        ):
            result = await LiteLLMAssessor(settings).assess_repository(
                make_summary()
            )
        assert result.readiness_score == 72

    async def test_all_models_fail(self) -> None:
        settings = Settings(litellm_model_chain=["model-a", "model-b"])
        with patch(
            "agentready.analysis.llm._llm_call._acompletion",
            new_callable=AsyncMock,
            side_effect=ConnectionError("API down"),
        ):
            with pytest.raises(AIAssessmentError, match="All 2 model"):
                await LiteLLMAssessor(settings).assess_repository(
                    make_summary()
                )

    async def test_website_prompt_carries_flows(
        self, website_analysis: WebsiteAnalysis
    ) -> None:
        settings = Settings(litellm_model_chain=["model-a"])
        summary = website_to_static(website_analysis)
        with patch(
            "agentready.analysis.llm._llm_call._acompletion",
            new_callable=AsyncMock,
            return_value=_response(json.dumps(_VALID)),
        ) as mock_call:
            await LiteLLMAssessor(settings).assess_website(
                summary, {"checkout": {"score": 7}}
            )
        messages = mock_call.await_args.kwargs["messages"]
        assert "website" in messages[0]["content"]
        assert '"checkout"' in messages[1]["content"]
