"""Synthesized assessments used when the generative assessor is unavailable.

These are deterministic, static-only stand-ins shaped like an
``AIAssessment``. They deliberately use their own point tables so a
fallback result never simply mirrors the engine's static rules.
"""

from __future__ import annotations

from collections.abc import Callable

from agentready.analysis.llm.schemas import AIAssessment, CategoryScores
from agentready.analysis.static.schemas import (
    StaticAnalysisSummary,
    WebsiteSignals,
)
from agentready.constants import (
    FALLBACK_ACCESSIBILITY_SCORE,
    NEUTRAL_FILE_SIZE_SCORE,
    Category,
    Confidence,
)

_CATEGORY_MAX = 20.0
_CATEGORY_TOTAL = _CATEGORY_MAX * len(Category)

type _Points = tuple[tuple[Callable[[StaticAnalysisSummary], bool], float], ...]

_REPOSITORY_POINTS: dict[Category, _Points] = {
    Category.DOCUMENTATION: (
        (lambda s: s.has_readme, 8),
        (lambda s: s.has_agents_doc, 6),
        (lambda s: s.has_contributing, 4),
        (lambda s: s.has_license, 4),
    ),
    Category.INSTRUCTION_CLARITY: (
        (lambda s: s.has_readme, 12),
        (lambda s: s.has_agents_doc, 8),
        (lambda s: s.has_contributing, 4),
    ),
    Category.WORKFLOW_AUTOMATION: (
        (lambda s: s.has_workflows, 15),
        (lambda s: s.has_tests, 5),
    ),
    Category.RISK_COMPLIANCE: (
        (lambda s: s.has_license, 5),
        (lambda s: s.has_error_handling, 10),
        (lambda s: s.has_tests, 5),
    ),
    Category.INTEGRATION_STRUCTURE: (
        (lambda s: s.has_workflows, 9),
        (lambda s: bool(s.languages), 6),
        (lambda s: s.has_tests, 5),
    ),
}


def _uniform_confidence(value: float) -> dict[str, float]:
    return {c.value: value for c in Category} | {"overall": value}


def _repository_findings(
    summary: StaticAnalysisSummary,
) -> tuple[list[str], list[str]]:
    findings: list[str] = []
    recommendations: list[str] = []
    if summary.has_readme:
        findings.append("README.md present with setup documentation")
    else:
        findings.append("No README.md file found")
        recommendations.append(
            "Create a comprehensive README.md with setup instructions "
            "and usage examples"
        )
    if summary.has_agents_doc:
        findings.append("AGENTS.md present for AI agent instructions")
    else:
        findings.append("No AGENTS.md file found")
        recommendations.append(
            "Create AGENTS.md with AI agent interaction guidelines"
        )
    if summary.has_workflows:
        findings.append("CI/CD workflows detected for automated processes")
    else:
        findings.append("No CI/CD workflows detected")
        recommendations.append(
            "Set up CI workflows for automated testing and deployment"
        )
    if summary.has_tests:
        findings.append("Test files detected for quality assurance")
    else:
        findings.append("No test files detected")
        recommendations.append(
            "Add a comprehensive test suite for better reliability"
        )
    return findings, recommendations


def repository_fallback(summary: StaticAnalysisSummary) -> AIAssessment:
    """Static-only stand-in for a repository assessment."""
    scores: dict[str, float] = {}
    for category, rules in _REPOSITORY_POINTS.items():
        points = sum(pts for check, pts in rules if check(summary))
        scores[category.value] = min(_CATEGORY_MAX, points)

    fsa = summary.file_size_analysis
    scores[Category.FILE_SIZE_OPTIMIZATION.value] = (
        min(_CATEGORY_MAX, round(fsa.agent_compatibility.overall / 5))
        if fsa is not None
        else NEUTRAL_FILE_SIZE_SCORE
    )

    categories = CategoryScores.model_validate(scores)
    findings, recommendations = _repository_findings(summary)
    return AIAssessment(
        readiness_score=round(categories.total() / _CATEGORY_TOTAL * 100),
        categories=categories,
        findings=findings,
        recommendations=recommendations,
        confidence=_uniform_confidence(Confidence.REPOSITORY_FALLBACK),
    )


def _website_readiness(site: WebsiteSignals) -> float:
    points = (
        (15 if site.has_structured_data else 0)
        + (10 if site.has_open_graph else 0)
        + (5 if site.has_twitter_cards else 0)
        + (10 if site.page_title else 0)
        + (10 if site.meta_description else 0)
        + (10 if site.accessibility_score > FALLBACK_ACCESSIBILITY_SCORE else 0)
        + (10 if site.contact_info else 0)
        + (5 if site.social_media_links else 0)
        + (5 if site.has_sitemap else 0)
        + (5 if site.has_robots_txt else 0)
        + (5 if site.technologies else 0)
    )
    return min(points, 100)


def _website_findings(site: WebsiteSignals) -> tuple[list[str], list[str]]:
    findings: list[str] = []
    recommendations: list[str] = []
    if not site.has_structured_data:
        findings.append(
            "No structured data (JSON-LD) found; AI agents will have "
            "difficulty understanding content"
        )
        recommendations.append(
            "Add JSON-LD structured data to help AI agents understand "
            "content structure"
        )
    if not site.has_open_graph:
        findings.append(
            "Missing Open Graph meta tags; limits AI agent context"
        )
        recommendations.append(
            "Implement Open Graph meta tags for better AI agent context"
        )
    if not site.page_title:
        findings.append("No page title found")
    if not site.meta_description:
        findings.append("No meta description found")
    if site.accessibility_score < FALLBACK_ACCESSIBILITY_SCORE:
        findings.append(
            "Low accessibility score; may impact AI agent content parsing"
        )
        recommendations.append(
            "Improve accessibility with semantic HTML, alt text and "
            "proper heading structure"
        )
    if not site.contact_info:
        findings.append("No contact information found")
        recommendations.append(
            "Add clear contact information for AI agent access"
        )
    if not site.has_sitemap:
        recommendations.append(
            "Create an XML sitemap to help AI agents discover all pages"
        )
    return findings, recommendations


def website_fallback(summary: StaticAnalysisSummary) -> AIAssessment:
    """Static-only stand-in for a website assessment."""
    site = summary.website or WebsiteSignals()
    categories = CategoryScores(
        documentation=15 if site.has_structured_data else 5,
        instruction_clarity=12 if site.has_open_graph else 5,
        workflow_automation=10 if site.contact_info else 5,
        risk_compliance=(
            12 if site.accessibility_score > FALLBACK_ACCESSIBILITY_SCORE
            else 5
        ),
        integration_structure=10 if site.technologies else 5,
        file_size_optimization=8 if site.has_sitemap else 5,
    )
    findings, recommendations = _website_findings(site)
    return AIAssessment(
        readiness_score=_website_readiness(site),
        categories=categories,
        findings=findings,
        recommendations=recommendations,
        confidence=_uniform_confidence(Confidence.WEBSITE_FALLBACK),
    )
