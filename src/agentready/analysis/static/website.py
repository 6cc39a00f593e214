"""Fold website analysis into the repository-shaped static summary."""

from __future__ import annotations

from agentready.analysis.static.schemas import (
    StaticAnalysisSummary,
    WebsiteAnalysis,
    WebsiteSignals,
)
from agentready.constants import BYTES_PER_MB, AssessmentKind


def website_to_static(analysis: WebsiteAnalysis) -> StaticAnalysisSummary:
    """Map a website analysis onto ``StaticAnalysisSummary``.

    Repository markers stay False (a page has no README or CI); the
    site's technologies stand in for languages and the page itself is
    the single "file". Website-specific signals travel unchanged in
    ``website`` so the rule tables can score them.
    """
    signals = WebsiteSignals.model_validate(
        analysis.model_dump(include=set(WebsiteSignals.model_fields))
    )
    return StaticAnalysisSummary(
        kind=AssessmentKind.WEBSITE,
        target_url=analysis.website_url,
        languages=list(analysis.technologies),
        file_count=1,
        repository_size_mb=analysis.content_length / BYTES_PER_MB,
        website=signals,
    )
