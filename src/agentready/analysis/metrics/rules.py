"""Deterministic static scoring rules, one table per assessment kind.

Every category's rules are defined exactly once here. Points in each
table sum to ``RULE_POINTS_SCALE`` and are rescaled to the configured
category scale.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from agentready.analysis.static.schemas import (
    FileSizeAnalysis,
    StaticAnalysisSummary,
    WebsiteSignals,
)
from agentready.constants import (
    ACCESSIBILITY_PASS_SCORE,
    CONTEXT_EFFICIENCY_ADJUSTMENT,
    CRITICAL_FILE_MAX_PENALTY,
    CRITICAL_FILE_PENALTY,
    FAST_PAGE_LOAD_MS,
    LARGE_FILE_MAX_PENALTY,
    LARGE_FILE_PENALTY,
    MIN_INTERNAL_LINKS,
    NEUTRAL_FILE_SIZE_SCORE,
    SUBSTANTIAL_CONTENT_CHARS,
    AssessmentKind,
    Category,
    Confidence,
    ContextEfficiency,
)

RULE_POINTS_SCALE = 20.0

_EFFICIENCY_SUB_SCORE: dict[ContextEfficiency, float] = {
    ContextEfficiency.EXCELLENT: 20.0,
    ContextEfficiency.GOOD: 15.0,
    ContextEfficiency.MODERATE: 10.0,
    ContextEfficiency.POOR: 0.0,
}


@dataclass(frozen=True)
class Rule:
    """A single presence check worth ``points`` when satisfied."""

    name: str
    points: float
    check: Callable[[StaticAnalysisSummary], bool]
    finding: str
    recommendation: str


@dataclass
class CategoryEvaluation:
    """Static-only result for one category, on the category scale."""

    score: float
    confidence: float
    sub_scores: dict[str, float] = field(
        default_factory=lambda: dict[str, float]()
    )
    findings: list[str] = field(default_factory=lambda: list[str]())
    recommendations: list[str] = field(default_factory=lambda: list[str]())


def _site(summary: StaticAnalysisSummary) -> WebsiteSignals:
    return summary.website or WebsiteSignals()


def _fast_page_load(summary: StaticAnalysisSummary) -> bool:
    speed = _site(summary).page_load_speed_ms
    return speed is not None and speed < FAST_PAGE_LOAD_MS


REPOSITORY_RULES: dict[Category, tuple[Rule, ...]] = {
    Category.DOCUMENTATION: (
        Rule(
            "readme", 8, lambda s: s.has_readme,
            "Missing README.md file",
            "Create comprehensive README.md with setup instructions",
        ),
        Rule(
            "contributing", 4, lambda s: s.has_contributing,
            "Missing CONTRIBUTING.md file",
            "Add CONTRIBUTING.md for contributor guidance",
        ),
        Rule(
            "agents_doc", 4, lambda s: s.has_agents_doc,
            "Missing AGENTS.md file",
            "Add AGENTS.md with AI agent specific instructions",
        ),
        Rule(
            "license", 4, lambda s: s.has_license,
            "Missing LICENSE file",
            "Add LICENSE file to clarify usage rights",
        ),
    ),
    Category.INSTRUCTION_CLARITY: (
        Rule(
            "readme", 10, lambda s: s.has_readme,
            "No setup instructions available",
            "Create detailed setup and usage instructions",
        ),
        Rule(
            "agents_doc", 6, lambda s: s.has_agents_doc,
            "No AI agent specific instructions",
            "Add specific instructions for AI agents",
        ),
        Rule(
            "contributing", 4, lambda s: s.has_contributing,
            "No contribution workflow documented",
            "Document the contribution workflow agents should follow",
        ),
    ),
    Category.WORKFLOW_AUTOMATION: (
        Rule(
            "workflows", 12, lambda s: s.has_workflows,
            "No CI/CD workflows detected",
            "Implement CI/CD workflows for automated processes",
        ),
        Rule(
            "tests", 8, lambda s: s.has_tests,
            "No automated tests found",
            "Add automated test suite",
        ),
    ),
    Category.RISK_COMPLIANCE: (
        Rule(
            "license", 6, lambda s: s.has_license,
            "No license information available",
            "Add appropriate license file",
        ),
        Rule(
            "error_handling", 8, lambda s: s.has_error_handling,
            "Limited error handling detected",
            "Implement comprehensive error handling",
        ),
        Rule(
            "tests", 6, lambda s: s.has_tests,
            "No tests guarding automated changes",
            "Add tests so agent changes can be verified",
        ),
    ),
    Category.INTEGRATION_STRUCTURE: (
        Rule(
            "languages", 6, lambda s: bool(s.languages),
            "No programming languages detected",
            "Declare the project's languages and tooling",
        ),
        Rule(
            "workflows", 6, lambda s: s.has_workflows,
            "No automation infrastructure",
            "Set up automation infrastructure",
        ),
        Rule(
            "tests", 4, lambda s: s.has_tests,
            "No testing infrastructure",
            "Implement testing infrastructure",
        ),
        Rule(
            "agents_doc", 4, lambda s: s.has_agents_doc,
            "No integration guidance for agents",
            "Describe project structure and entry points in AGENTS.md",
        ),
    ),
}

WEBSITE_RULES: dict[Category, tuple[Rule, ...]] = {
    Category.DOCUMENTATION: (
        Rule(
            "structured_data", 8, lambda s: _site(s).has_structured_data,
            "Missing structured data markup",
            "Add structured data markup for better AI understanding",
        ),
        Rule(
            "open_graph", 4, lambda s: _site(s).has_open_graph,
            "No Open Graph meta tags found",
            "Implement Open Graph meta tags for social sharing",
        ),
        Rule(
            "twitter_cards", 3, lambda s: _site(s).has_twitter_cards,
            "No Twitter Cards meta tags",
            "Add Twitter Cards meta tags for better social media integration",
        ),
        Rule(
            "sitemap", 3, lambda s: _site(s).has_sitemap,
            "No XML sitemap available",
            "Create XML sitemap for better search engine indexing",
        ),
        Rule(
            "robots_txt", 2, lambda s: _site(s).has_robots_txt,
            "No robots.txt file found",
            "Add robots.txt file for search engine directives",
        ),
    ),
    Category.INSTRUCTION_CLARITY: (
        Rule(
            "technologies", 8, lambda s: bool(_site(s).technologies),
            "No technology stack detected",
            "Add technology stack information for better integration",
        ),
        Rule(
            "contact_info", 6, lambda s: bool(_site(s).contact_info),
            "No contact information found",
            "Add comprehensive contact information",
        ),
        Rule(
            "social_links", 3, lambda s: bool(_site(s).social_media_links),
            "No social media links detected",
            "Add social media links for better connectivity",
        ),
        Rule(
            "navigation", 3, lambda s: bool(_site(s).navigation_structure),
            "No clear navigation structure",
            "Implement clear navigation structure",
        ),
    ),
    Category.WORKFLOW_AUTOMATION: (
        Rule(
            "mobile_friendly", 8, lambda s: _site(s).mobile_friendly,
            "Website not mobile-friendly",
            "Optimize website for mobile devices",
        ),
        Rule(
            "fast_page_load", 6, _fast_page_load,
            "Slow or unmeasured page load speed",
            "Improve page load speed for better user experience",
        ),
        Rule(
            "navigation", 4, lambda s: bool(_site(s).navigation_structure),
            "No clear navigation structure",
            "Implement clear navigation structure",
        ),
        Rule(
            "service_worker", 2, lambda s: _site(s).has_service_worker,
            "No service worker registered",
            "Add a service worker for offline-capable flows",
        ),
    ),
    Category.RISK_COMPLIANCE: (
        Rule(
            "security_headers", 8, lambda s: bool(_site(s).security_headers),
            "No security headers detected",
            "Implement security headers for better protection",
        ),
        Rule(
            "contact_info", 6, lambda s: bool(_site(s).contact_info),
            "No contact information available",
            "Add contact information for compliance",
        ),
        Rule(
            "accessibility", 4,
            lambda s: _site(s).accessibility_score > ACCESSIBILITY_PASS_SCORE,
            "Accessibility issues detected",
            "Improve website accessibility for better usability",
        ),
        Rule(
            "manifest", 2, lambda s: _site(s).has_manifest,
            "No web app manifest found",
            "Add a web app manifest",
        ),
    ),
    Category.INTEGRATION_STRUCTURE: (
        Rule(
            "technologies", 8, lambda s: bool(_site(s).technologies),
            "No technology stack detected",
            "Document technology stack for better integration",
        ),
        Rule(
            "social_links", 6, lambda s: bool(_site(s).social_media_links),
            "No social media integration found",
            "Add social media integration for better connectivity",
        ),
        Rule(
            "contact_info", 4, lambda s: bool(_site(s).contact_info),
            "No contact information for integration",
            "Add contact information for integration support",
        ),
        Rule(
            "service_worker", 2, lambda s: _site(s).has_service_worker,
            "No service worker registered",
            "Add a service worker for background integration",
        ),
    ),
    Category.FILE_SIZE_OPTIMIZATION: (
        Rule(
            "substantial_content", 6,
            lambda s: _site(s).content_length > SUBSTANTIAL_CONTENT_CHARS,
            "Very limited content available",
            "Add more comprehensive content for better context",
        ),
        Rule(
            "images", 4, lambda s: _site(s).image_count > 0,
            "No images found for visual context",
            "Add relevant images for better visual context",
        ),
        Rule(
            "internal_links", 4,
            lambda s: _site(s).link_count > MIN_INTERNAL_LINKS,
            "Limited internal linking structure",
            "Improve internal linking structure for better navigation",
        ),
        Rule(
            "h1", 3, lambda s: _site(s).heading_structure.get("h1", 0) > 0,
            "No H1 heading found",
            "Add a single descriptive H1 heading",
        ),
        Rule(
            "h2", 3, lambda s: _site(s).heading_structure.get("h2", 0) > 0,
            "No H2 section headings found",
            "Structure content with H2 section headings",
        ),
    ),
}

RULE_TABLES: dict[AssessmentKind, dict[Category, tuple[Rule, ...]]] = {
    AssessmentKind.REPOSITORY: REPOSITORY_RULES,
    AssessmentKind.WEBSITE: WEBSITE_RULES,
}


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, value))


def _apply_rules(
    summary: StaticAnalysisSummary,
    rules: tuple[Rule, ...],
    category_scale: float,
) -> CategoryEvaluation:
    factor = category_scale / RULE_POINTS_SCALE
    points = 0.0
    evaluation = CategoryEvaluation(
        score=0.0, confidence=Confidence.STATIC_DEFAULT
    )
    for rule in rules:
        if rule.check(summary):
            points += rule.points
            evaluation.sub_scores[rule.name] = category_scale
        else:
            evaluation.sub_scores[rule.name] = 0.0
            evaluation.findings.append(rule.finding)
            evaluation.recommendations.append(rule.recommendation)
    evaluation.score = _clamp(points * factor, category_scale)
    return evaluation


def score_file_size(
    analysis: FileSizeAnalysis | None,
    category_scale: float = RULE_POINTS_SCALE,
) -> CategoryEvaluation:
    """Score repository file size optimization.

    Without an analysis the category gets a neutral mid-scale score at
    reduced confidence.
    """
    factor = category_scale / RULE_POINTS_SCALE
    if analysis is None:
        return CategoryEvaluation(
            score=NEUTRAL_FILE_SIZE_SCORE * factor,
            confidence=Confidence.STATIC_NEUTRAL_DEFAULT,
            findings=[
                "No file size analysis available; "
                "file size optimization scored as neutral"
            ],
            recommendations=[
                "Run a file size analysis to measure agent context fit"
            ],
        )

    compat = analysis.agent_compatibility.overall / 100 * RULE_POINTS_SCALE
    large = len(analysis.large_files)
    critical = len(analysis.non_optimal_critical_files)
    large_penalty = min(LARGE_FILE_MAX_PENALTY, large * LARGE_FILE_PENALTY)
    critical_penalty = min(
        CRITICAL_FILE_MAX_PENALTY, critical * CRITICAL_FILE_PENALTY
    )
    efficiency = analysis.context_consumption.context_efficiency
    raw = (
        compat
        - large_penalty
        - critical_penalty
        + CONTEXT_EFFICIENCY_ADJUSTMENT[efficiency]
    )

    findings: list[str] = []
    recommendations: list[str] = []
    if large:
        findings.append(f"{large} file(s) exceed agent file size limits")
        recommendations.append(
            "Optimize large files for better AI agent compatibility"
        )
    if critical:
        findings.append(
            f"{critical} critical instruction file(s) are larger than optimal"
        )
        recommendations.append(
            "Trim critical instruction files so agents can load them whole"
        )
    if efficiency == ContextEfficiency.POOR:
        findings.append("Context consumption efficiency is poor")
    recommendations.extend(analysis.recommendations)

    return CategoryEvaluation(
        score=_clamp(raw * factor, category_scale),
        confidence=Confidence.STATIC_DEFAULT,
        sub_scores={
            "agent_compatibility": compat * factor,
            "large_files": (
                RULE_POINTS_SCALE
                - large_penalty / LARGE_FILE_MAX_PENALTY * RULE_POINTS_SCALE
            ) * factor,
            "critical_files": (
                RULE_POINTS_SCALE
                - critical_penalty
                / CRITICAL_FILE_MAX_PENALTY
                * RULE_POINTS_SCALE
            ) * factor,
            "context_efficiency": _EFFICIENCY_SUB_SCORE[efficiency] * factor,
        },
        findings=findings,
        recommendations=recommendations,
    )


def score_category(
    summary: StaticAnalysisSummary,
    category: Category,
    file_size_analysis: FileSizeAnalysis | None = None,
    category_scale: float = RULE_POINTS_SCALE,
) -> CategoryEvaluation:
    """Static-only score for ``category`` on the category scale."""
    if (
        summary.kind == AssessmentKind.REPOSITORY
        and category == Category.FILE_SIZE_OPTIMIZATION
    ):
        return score_file_size(file_size_analysis, category_scale)
    rules = RULE_TABLES[summary.kind][category]
    return _apply_rules(summary, rules, category_scale)
