"""StaticAnalyzer backed by pre-computed JSON summaries on disk."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from agentready.analysis.static.schemas import (
    StaticAnalysisSummary,
    WebsiteAnalysis,
)

logger = logging.getLogger(__name__)


class JsonFileStaticAnalyzer:
    """Reads summaries produced by an external static analyzer.

    The ``url`` argument is a path to the JSON document. Both
    snake_case and the analyzer's camelCase field names are accepted.
    """

    async def analyze_repository(self, url: str) -> StaticAnalysisSummary:
        raw = await asyncio.to_thread(Path(url).read_text, "utf-8")
        summary = StaticAnalysisSummary.model_validate_json(raw)
        logger.debug(
            "event=summary_loaded path=%s kind=%s", url, summary.kind
        )
        if not summary.target_url:
            summary = summary.model_copy(update={"target_url": url})
        return summary

    async def analyze_website(self, url: str) -> WebsiteAnalysis:
        raw = await asyncio.to_thread(Path(url).read_text, "utf-8")
        analysis = WebsiteAnalysis.model_validate_json(raw)
        logger.debug("event=website_loaded path=%s", url)
        if not analysis.website_url:
            analysis = analysis.model_copy(update={"website_url": url})
        return analysis
