"""In-memory fake collaborators for testing.

Scripted implementations of both collaborator protocols.
No network, no LLM calls; instant responses for unit tests.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from agentready.analysis.llm.schemas import AIAssessment
from agentready.analysis.static.schemas import (
    StaticAnalysisSummary,
    WebsiteAnalysis,
)

type ScriptedAnswer = AIAssessment | Mapping[str, Any] | BaseException


class FakeStaticAnalyzer:
    """StaticAnalyzer returning fixed summaries, or raising ``error``."""

    def __init__(
        self,
        summary: StaticAnalysisSummary | None = None,
        website: WebsiteAnalysis | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._summary = summary or StaticAnalysisSummary()
        self._website = website or WebsiteAnalysis()
        self._error = error
        self.calls: list[str] = []

    async def analyze_repository(self, url: str) -> StaticAnalysisSummary:
        self.calls.append(url)
        if self._error is not None:
            raise self._error
        return self._summary.model_copy(update={"target_url": url})

    async def analyze_website(self, url: str) -> WebsiteAnalysis:
        self.calls.append(url)
        if self._error is not None:
            raise self._error
        return self._website.model_copy(update={"website_url": url})


class FakeAIAssessor:
    """AIAssessor that replays a script of answers, one per call.

    Exceptions in the script are raised; the last entry repeats once
    the script is exhausted.
    """

    def __init__(self, script: Sequence[ScriptedAnswer]) -> None:
        if not script:
            raise ValueError("FakeAIAssessor needs at least one answer")
        self._script = list(script)
        self.calls = 0
        self.agentic_flows: list[dict[str, Any]] = []

    def _next(self) -> AIAssessment | Mapping[str, Any]:
        answer = self._script[min(self.calls, len(self._script) - 1)]
        self.calls += 1
        if isinstance(answer, BaseException):
            raise answer
        return answer

    async def assess_repository(
        self, summary: StaticAnalysisSummary
    ) -> AIAssessment | Mapping[str, Any]:
        return self._next()

    async def assess_website(
        self,
        summary: StaticAnalysisSummary,
        agentic_flows: dict[str, Any],
    ) -> AIAssessment | Mapping[str, Any]:
        self.agentic_flows.append(agentic_flows)
        return self._next()
