"""Unified metrics: static rules, score merging and validation."""

from agentready.analysis.metrics.config import MetricsConfig, ValidatorConfig
from agentready.analysis.metrics.engine import UnifiedMetricsEngine
from agentready.analysis.metrics.schemas import (
    AlignmentReport,
    UnifiedAssessmentResult,
    UnifiedCategoryScore,
    UnifiedMetric,
    ValidationIssue,
    ValidationResult,
)
from agentready.analysis.metrics.validator import MetricsValidator

__all__ = [
    "AlignmentReport",
    "MetricsConfig",
    "MetricsValidator",
    "UnifiedAssessmentResult",
    "UnifiedCategoryScore",
    "UnifiedMetric",
    "UnifiedMetricsEngine",
    "ValidationIssue",
    "ValidationResult",
    "ValidatorConfig",
]
