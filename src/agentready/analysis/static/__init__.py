"""Static analysis boundary: summaries produced by the static collaborators."""

from agentready.analysis.static.schemas import (
    AgentCompatibility,
    ContextConsumption,
    CriticalFileInfo,
    FileSizeAnalysis,
    FileSizeHistogram,
    LargeFileInfo,
    StaticAnalysisSummary,
    WebsiteAnalysis,
    WebsiteSignals,
)
from agentready.analysis.static.website import website_to_static

__all__ = [
    "AgentCompatibility",
    "ContextConsumption",
    "CriticalFileInfo",
    "FileSizeAnalysis",
    "FileSizeHistogram",
    "LargeFileInfo",
    "StaticAnalysisSummary",
    "WebsiteAnalysis",
    "WebsiteSignals",
    "website_to_static",
]
