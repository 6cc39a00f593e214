"""LLM system prompts and user-prompt builders for readiness assessment."""

from __future__ import annotations

import json
from typing import Any

from agentready.analysis.static.schemas import StaticAnalysisSummary
from agentready.constants import KEY_DOCUMENT_MAX_CHARS

# ── Shared output contract ────────────────────────────────────────

_OUTPUT_CONTRACT = """\
## Output Requirements

Return a single JSON object with these fields:

- readiness_score: integer 0-100, overall readiness for autonomous AI agents.
- categories: object with exactly these keys, each an integer 0-20:
  documentation, instruction_clarity, workflow_automation, risk_compliance,
  integration_structure, file_size_optimization.
- confidence: object with the same six keys plus "overall", each 0-100,
  describing how sure you are about each score given the evidence.
- findings: list of short factual observations.
- recommendations: list of short, actionable improvements.
- category_findings / category_recommendations (optional): objects keyed by
  the six category names, each a list of strings specific to that category.

Never exceed the stated ranges. Do not wrap the JSON in markdown."""

REPOSITORY_ASSESSMENT_PROMPT = f"""\
You are an assessor of how ready a software repository is for autonomous AI \
coding agents. You receive a deterministic summary of the repository and the \
text of its key documents.

## Scoring Guide
- documentation: README, contributing guide, agent instruction files, license.
- instruction_clarity: whether an agent could set up, build, and run the \
project from the written instructions alone.
- workflow_automation: CI/CD workflows and automated tests.
- risk_compliance: licensing, error handling, safety of automated changes.
- integration_structure: language/tooling clarity and project structure.
- file_size_optimization: whether files fit agent context and size limits.

{_OUTPUT_CONTRACT}"""

WEBSITE_ASSESSMENT_PROMPT = f"""\
You are an assessor of how ready a website is for AI agents that gather \
information and complete tasks on behalf of users. You receive deterministic \
signals scraped from the site and the agentic-flow scores of its pages.

## Scoring Guide
- documentation: structured data, Open Graph/Twitter metadata, sitemap, robots.
- instruction_clarity: technology stack, contact details, navigation clarity.
- workflow_automation: mobile support, load speed, task-completion paths.
- risk_compliance: security headers, accessibility, contact for compliance.
- integration_structure: technologies, social and contact integration points.
- file_size_optimization: content volume and page structure an agent can read.

{_OUTPUT_CONTRACT}"""


def _summary_facts(summary: StaticAnalysisSummary) -> dict[str, Any]:
    return summary.model_dump(
        mode="json",
        exclude={"key_documents", "website", "file_size_analysis"},
    )


def build_repository_prompt(summary: StaticAnalysisSummary) -> str:
    """Build the user prompt for a repository assessment."""
    parts = [
        "## Repository Summary",
        json.dumps(_summary_facts(summary), indent=2),
    ]
    fsa = summary.file_size_analysis
    if fsa is not None:
        parts.extend([
            "## File Size Analysis",
            json.dumps(
                {
                    "agent_compatibility": fsa.agent_compatibility.model_dump(),
                    "large_files": len(fsa.large_files),
                    "non_optimal_critical_files": len(
                        fsa.non_optimal_critical_files
                    ),
                    "context_efficiency": fsa.context_consumption.context_efficiency,
                },
                indent=2,
            ),
        ])
    for name, text in summary.key_documents.items():
        parts.extend([f"## {name}", text[:KEY_DOCUMENT_MAX_CHARS]])
    return "\n\n".join(parts)


def build_website_prompt(
    summary: StaticAnalysisSummary,
    agentic_flows: dict[str, Any],
) -> str:
    """Build the user prompt for a website assessment."""
    signals = summary.website.model_dump(mode="json") if summary.website else {}
    parts = [
        f"## Website\n{summary.target_url}",
        "## Signals",
        json.dumps(signals, indent=2),
        "## Agentic Flows",
        json.dumps(agentic_flows, indent=2, default=str),
    ]
    return "\n\n".join(parts)
