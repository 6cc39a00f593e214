"""Protocol-based collaborator interfaces for the assessment pipeline.

Implementations satisfy these protocols structurally (no inheritance).
Test doubles can be plain classes or mocks matching the same signature.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from agentready.analysis.llm.schemas import AIAssessment
from agentready.analysis.static.schemas import (
    StaticAnalysisSummary,
    WebsiteAnalysis,
)


class StaticAnalyzer(Protocol):
    async def analyze_repository(self, url: str) -> StaticAnalysisSummary: ...
    async def analyze_website(self, url: str) -> WebsiteAnalysis: ...


class AIAssessor(Protocol):
    async def assess_repository(
        self, summary: StaticAnalysisSummary
    ) -> AIAssessment | Mapping[str, Any]: ...
    async def assess_website(
        self,
        summary: StaticAnalysisSummary,
        agentic_flows: dict[str, Any],
    ) -> AIAssessment | Mapping[str, Any]: ...
