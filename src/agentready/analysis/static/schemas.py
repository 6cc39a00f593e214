"""Pydantic models for static analysis output.

These are the shapes the static collaborators (repository scanner,
website scraper, file size analyzer) must produce. Field aliases accept
the camelCase keys those collaborators emit on the wire.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from agentready.constants import AssessmentKind, ContextEfficiency

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class FileSizeHistogram(BaseModel):
    """Count of files per size bucket."""

    model_config = _WIRE_CONFIG

    under_1mb: int = Field(
        0, validation_alias=AliasChoices("under_1mb", "under1MB")
    )
    under_2mb: int = Field(
        0, validation_alias=AliasChoices("under_2mb", "under2MB")
    )
    under_10mb: int = Field(
        0, validation_alias=AliasChoices("under_10mb", "under10MB")
    )
    under_50mb: int = Field(
        0, validation_alias=AliasChoices("under_50mb", "under50MB")
    )
    over_50mb: int = Field(
        0, validation_alias=AliasChoices("over_50mb", "over50MB")
    )


class LargeFileInfo(BaseModel):
    """A file large enough to be blocked or truncated by some agents."""

    model_config = _WIRE_CONFIG

    path: str
    size: int = 0  # bytes
    size_formatted: str = ""
    type: str = "code"  # binary, text, code, documentation, data
    agent_impact: dict[str, str] = Field(
        default_factory=lambda: dict[str, str]()
    )
    recommendation: str = ""


class CriticalFileInfo(BaseModel):
    """An instruction-bearing file (README, AGENTS.md, …) and its fit."""

    model_config = _WIRE_CONFIG

    path: str
    size: int = 0
    size_formatted: str = ""
    type: str = "readme"  # readme, agents, contributing, license, main_source
    is_optimal: bool = True
    agent_impact: dict[str, str] = Field(
        default_factory=lambda: dict[str, str]()
    )
    recommendation: str = ""


class InstructionFileStats(BaseModel):
    model_config = _WIRE_CONFIG

    size: int = 0
    lines: int = 0
    estimated_tokens: int = 0


class ContextConsumption(BaseModel):
    """How much agent context the instruction files consume."""

    model_config = _WIRE_CONFIG

    instruction_files: dict[str, InstructionFileStats | None] = Field(
        default_factory=lambda: dict[str, InstructionFileStats | None]()
    )
    total_context_files: int = 0
    average_context_file_size: float = 0.0
    context_efficiency: ContextEfficiency = ContextEfficiency.MODERATE
    estimated_tokens: int = 0
    recommendations: list[str] = Field(default_factory=lambda: list[str]())


class AgentCompatibility(BaseModel):
    """Per-agent compatibility percentages (0–100)."""

    model_config = _WIRE_CONFIG

    cursor: float = Field(100.0, ge=0, le=100)
    github_copilot: float = Field(100.0, ge=0, le=100)
    claude_web: float = Field(100.0, ge=0, le=100)
    claude_api: float = Field(100.0, ge=0, le=100)
    overall: float = Field(100.0, ge=0, le=100)


class FileSizeAnalysis(BaseModel):
    """File size and context-consumption analysis of a repository."""

    model_config = _WIRE_CONFIG

    total_files: int = 0
    files_by_size: FileSizeHistogram = Field(
        default_factory=FileSizeHistogram
    )
    large_files: list[LargeFileInfo] = Field(
        default_factory=lambda: list[LargeFileInfo]()
    )
    critical_files: list[CriticalFileInfo] = Field(
        default_factory=lambda: list[CriticalFileInfo]()
    )
    context_consumption: ContextConsumption = Field(
        default_factory=ContextConsumption
    )
    agent_compatibility: AgentCompatibility = Field(
        default_factory=AgentCompatibility
    )
    recommendations: list[str] = Field(default_factory=lambda: list[str]())

    @property
    def non_optimal_critical_files(self) -> list[CriticalFileInfo]:
        return [f for f in self.critical_files if not f.is_optimal]


class WebsiteSignals(BaseModel):
    """Website-specific static signals carried on a static summary."""

    model_config = _WIRE_CONFIG

    page_title: str = ""
    meta_description: str = ""
    has_structured_data: bool = False
    has_open_graph: bool = False
    has_twitter_cards: bool = False
    has_sitemap: bool = False
    has_robots_txt: bool = False
    has_favicon: bool = False
    has_manifest: bool = False
    has_service_worker: bool = False
    mobile_friendly: bool = False
    page_load_speed_ms: float | None = Field(
        None,
        validation_alias=AliasChoices(
            "page_load_speed_ms", "pageLoadSpeedMs", "pageLoadSpeed"
        ),
    )
    accessibility_score: float = 0.0
    seo_score: float = 0.0
    content_length: int = 0
    image_count: int = 0
    link_count: int = 0
    heading_structure: dict[str, int] = Field(
        default_factory=lambda: dict[str, int]()
    )
    technologies: list[str] = Field(default_factory=lambda: list[str]())
    security_headers: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    social_media_links: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    contact_info: list[str] = Field(default_factory=lambda: list[str]())
    navigation_structure: list[str] = Field(
        default_factory=lambda: list[str]()
    )


class WebsiteAnalysis(WebsiteSignals):
    """Raw output of the website analyzer collaborator."""

    website_url: str = ""
    agentic_flows: dict[str, Any] = Field(
        default_factory=lambda: dict[str, Any]()
    )


class StaticAnalysisSummary(BaseModel):
    """Deterministic facts about the assessed artifact.

    Repositories fill the boolean markers directly; websites are mapped
    onto the same shape by ``website_to_static`` and carry their own
    signals in ``website``.
    """

    model_config = _WIRE_CONFIG

    kind: AssessmentKind = AssessmentKind.REPOSITORY
    target_url: str = ""
    has_readme: bool = False
    has_contributing: bool = False
    has_agents_doc: bool = Field(
        False,
        validation_alias=AliasChoices(
            "has_agents_doc", "hasAgentsDoc", "hasAgents"
        ),
    )
    has_license: bool = False
    has_workflows: bool = False
    has_tests: bool = False
    has_error_handling: bool = Field(
        False,
        validation_alias=AliasChoices(
            "has_error_handling", "hasErrorHandling", "errorHandling"
        ),
    )
    languages: list[str] = Field(default_factory=lambda: list[str]())
    file_count: int = 0
    lines_of_code: int = 0
    repository_size_mb: float = 0.0
    workflow_files: list[str] = Field(default_factory=lambda: list[str]())
    test_files: list[str] = Field(default_factory=lambda: list[str]())
    key_documents: dict[str, str] = Field(
        default_factory=lambda: dict[str, str]()
    )
    file_size_analysis: FileSizeAnalysis | None = None
    website: WebsiteSignals | None = None

    @model_validator(mode="after")
    def _website_kind_has_signals(self) -> StaticAnalysisSummary:
        if self.kind == AssessmentKind.WEBSITE and self.website is None:
            raise ValueError(
                "website summaries must carry website signals"
            )
        return self
