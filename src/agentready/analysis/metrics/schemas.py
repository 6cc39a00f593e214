"""Pydantic models for unified metrics and validation output."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field, model_validator

from agentready.constants import (
    VARIANCE_DECIMALS,
    AssessmentKind,
    Category,
    ConfidenceLevel,
    IssueSeverity,
    IssueType,
    MetricSource,
)


def score_variance(static_value: float, ai_value: float) -> float:
    """Absolute static/AI difference, rounded to a stable grid."""
    return round(abs(static_value - ai_value), VARIANCE_DECIMALS)


class MetricMetadata(BaseModel):
    """Raw contributing values, kept so validation never re-derives them."""

    static_value: float | None = None
    ai_value: float | None = None
    variance: float | None = None
    is_validated: bool = False


class UnifiedMetric(BaseModel):
    """A scored value with its confidence and provenance."""

    value: float
    confidence: float = Field(ge=0, le=100)
    source: MetricSource
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    metadata: MetricMetadata = Field(default_factory=MetricMetadata)

    @model_validator(mode="after")
    def _hybrid_carries_both_sides(self) -> UnifiedMetric:
        if self.source != MetricSource.HYBRID:
            return self
        meta = self.metadata
        if meta.static_value is None or meta.ai_value is None:
            raise ValueError(
                "hybrid metrics need both static_value and ai_value"
            )
        if meta.variance != score_variance(meta.static_value, meta.ai_value):
            raise ValueError(
                "hybrid variance must equal |static_value - ai_value|"
            )
        return self

    @property
    def is_hybrid(self) -> bool:
        return self.source == MetricSource.HYBRID


class UnifiedCategoryScore(BaseModel):
    """One category's score, sub-metrics and deduplicated insights."""

    score: UnifiedMetric
    sub_metrics: dict[str, UnifiedMetric] = Field(
        default_factory=lambda: dict[str, UnifiedMetric]()
    )
    findings: list[str] = Field(default_factory=lambda: list[str]())
    recommendations: list[str] = Field(
        default_factory=lambda: list[str]()
    )


class AssessmentStatus(BaseModel):
    kind: AssessmentKind = AssessmentKind.REPOSITORY
    static_analysis_enabled: bool = True
    ai_analysis_enabled: bool = False
    hybrid_mode: bool = False
    total_files: int = 0


class Insights(BaseModel):
    findings: list[str] = Field(default_factory=lambda: list[str]())
    recommendations: list[str] = Field(
        default_factory=lambda: list[str]()
    )


class UnifiedAssessmentResult(BaseModel):
    """Normalized assessment tree produced by the metrics engine."""

    overall_score: UnifiedMetric
    categories: dict[Category, UnifiedCategoryScore]
    assessment_status: AssessmentStatus = Field(
        default_factory=AssessmentStatus
    )
    insights: Insights = Field(default_factory=Insights)


class ValidationIssue(BaseModel):
    """A single disagreement, low-confidence or missing-data finding."""

    type: IssueType
    severity: IssueSeverity
    metric: str
    message: str
    static_value: float | None = None
    ai_value: float | None = None
    variance: float | None = None


class ValidationResult(BaseModel):
    """Verdict on how well static and AI scoring agree."""

    is_valid: bool
    alignment_score: float = Field(ge=0, le=100)
    issues: list[ValidationIssue] = Field(
        default_factory=lambda: list[ValidationIssue]()
    )
    recommendations: list[str] = Field(
        default_factory=lambda: list[str]()
    )

    @property
    def critical_issues(self) -> list[ValidationIssue]:
        return [
            i for i in self.issues
            if i.severity == IssueSeverity.CRITICAL
        ]


class AlignmentReport(BaseModel):
    """Per-category alignment breakdown."""

    overall_alignment: float
    category_alignments: dict[str, float] = Field(
        default_factory=lambda: dict[str, float]()
    )
    critical_issues: list[ValidationIssue] = Field(
        default_factory=lambda: list[ValidationIssue]()
    )
    improvement_suggestions: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    confidence_level: ConfidenceLevel = ConfidenceLevel.LOW
