"""Shared test fixtures: summaries, assessments and pipeline config."""

import os

# Force demo API keys for all tests; no real LLM calls.
# These are set unconditionally at import time, so even if you have
# real keys in your shell environment, pytest overwrites them before
# any Settings() is created.
os.environ["ANTHROPIC_API_KEY"] = "for-demo-purposes-only"
os.environ["OPENAI_API_KEY"] = "for-demo-purposes-only"
# Use litellm's bundled model cost map instead of fetching it at import.
os.environ["LITELLM_LOCAL_MODEL_COST_MAP"] = "True"

from typing import Any

import pytest

from agentready.analysis.llm.schemas import AIAssessment, CategoryScores
from agentready.analysis.static.schemas import (
    AgentCompatibility,
    ContextConsumption,
    CriticalFileInfo,
    FileSizeAnalysis,
    LargeFileInfo,
    StaticAnalysisSummary,
    WebsiteAnalysis,
)
from agentready.constants import Category, ContextEfficiency
from agentready.services.assessment_service import AlignedAssessmentConfig


def make_summary(**overrides: Any) -> StaticAnalysisSummary:
    """Repository summary: README, CONTRIBUTING, LICENSE, CI, error
    handling present; no AGENTS.md, no tests; TypeScript."""
    fields: dict[str, Any] = {
        "target_url": "https://github.com/acme/widget",
        "has_readme": True,
        "has_contributing": True,
        "has_agents_doc": False,
        "has_license": True,
        "has_workflows": True,
        "has_tests": False,
        "has_error_handling": True,
        "languages": ["TypeScript"],
        "file_count": 120,
        "lines_of_code": 8400,
        "repository_size_mb": 3.2,
    }
    fields.update(overrides)
    return StaticAnalysisSummary(**fields)


def make_assessment(
    value: float = 15.0,
    *,
    confidence: float | None = 80.0,
    **overrides: Any,
) -> AIAssessment:
    """AI assessment with every category at ``value``."""
    scores = dict.fromkeys((c.value for c in Category), value)
    scores.update(
        {k: v for k, v in overrides.items() if k in scores}
    )
    extra = {k: v for k, v in overrides.items() if k not in scores}
    conf = (
        {c.value: confidence for c in Category}
        if confidence is not None
        else {}
    )
    return AIAssessment(
        readiness_score=75,
        categories=CategoryScores.model_validate(scores),
        confidence=conf,
        **extra,
    )


def make_file_size_analysis(
    *,
    overall: float = 80.0,
    large: int = 0,
    non_optimal_critical: int = 0,
    efficiency: ContextEfficiency = ContextEfficiency.GOOD,
) -> FileSizeAnalysis:
    return FileSizeAnalysis(
        total_files=120,
        large_files=[
            LargeFileInfo(path=f"assets/blob{i}.bin", size=3_000_000)
            for i in range(large)
        ],
        critical_files=[
            CriticalFileInfo(
                path=f"docs/GUIDE{i}.md", type="readme", is_optimal=False
            )
            for i in range(non_optimal_critical)
        ],
        context_consumption=ContextConsumption(
            context_efficiency=efficiency
        ),
        agent_compatibility=AgentCompatibility(overall=overall),
    )


@pytest.fixture
def summary() -> StaticAnalysisSummary:
    return make_summary()


@pytest.fixture
def website_analysis() -> WebsiteAnalysis:
    return WebsiteAnalysis(
        website_url="https://acme.example",
        page_title="Acme",
        meta_description="Widgets for everyone",
        has_structured_data=True,
        has_open_graph=True,
        has_sitemap=True,
        mobile_friendly=True,
        page_load_speed_ms=1200,
        accessibility_score=72,
        content_length=5400,
        image_count=6,
        link_count=24,
        heading_structure={"h1": 1, "h2": 4},
        technologies=["React", "Next.js"],
        security_headers=["content-security-policy"],
        contact_info=["hello@acme.example"],
        navigation_structure=["Home", "Pricing", "Docs"],
        agentic_flows={"checkout": {"score": 7}},
    )


@pytest.fixture
def fast_config() -> AlignedAssessmentConfig:
    """Orchestrator config with zero back-off for fast tests."""
    return AlignedAssessmentConfig(
        retry_initial_wait=0.0,
        retry_max_wait=0.0,
        attempt_timeout_seconds=5.0,
    )
