"""Scoring and validation configuration.

Both configs are immutable and injected at construction; weight sums
are checked when the config is built, not at combine time.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from agentready.constants import Category

_WEIGHT_TOLERANCE = 1e-6


def _default_category_weights() -> dict[Category, float]:
    return {
        Category.DOCUMENTATION: 0.20,
        Category.INSTRUCTION_CLARITY: 0.20,
        Category.WORKFLOW_AUTOMATION: 0.20,
        Category.RISK_COMPLIANCE: 0.20,
        Category.INTEGRATION_STRUCTURE: 0.10,
        Category.FILE_SIZE_OPTIMIZATION: 0.10,
    }


def _check_category_weights(weights: dict[Category, float]) -> None:
    missing = [c.value for c in Category if c not in weights]
    if missing:
        raise ValueError(
            f"category_weights missing: {', '.join(missing)}"
        )
    for category, weight in weights.items():
        if not 0 <= weight <= 1:
            raise ValueError(
                f"category weight for {category} must be within 0-1, "
                f"got {weight}"
            )
    total = sum(weights.values())
    if not math.isclose(total, 1.0, abs_tol=_WEIGHT_TOLERANCE):
        raise ValueError(
            f"category_weights must sum to 1, got {total:.6f}"
        )


class MetricsConfig(BaseModel):
    """Scales, source weights and thresholds for the metrics engine."""

    model_config = ConfigDict(frozen=True)

    category_scale: float = Field(20.0, gt=0)
    overall_scale: float = Field(100.0, gt=0)
    static_weight: float = Field(0.3, ge=0, le=1)
    ai_weight: float = Field(0.7, ge=0, le=1)
    category_weights: dict[Category, float] = Field(
        default_factory=_default_category_weights
    )
    max_score_variance: float = Field(15.0, gt=0)
    min_confidence_threshold: float = Field(60.0, ge=0, le=100)

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> MetricsConfig:
        source_total = self.static_weight + self.ai_weight
        if not math.isclose(source_total, 1.0, abs_tol=_WEIGHT_TOLERANCE):
            raise ValueError(
                f"static_weight + ai_weight must equal 1, "
                f"got {source_total:.6f}"
            )
        _check_category_weights(self.category_weights)
        return self


class ValidatorConfig(BaseModel):
    """Thresholds for the metrics validator."""

    model_config = ConfigDict(frozen=True)

    max_variance: float = Field(15.0, gt=0)
    min_confidence: float = Field(60.0, ge=0, le=100)
    critical_variance: float = Field(20.0, gt=0)
    low_confidence_threshold: float = Field(40.0, ge=0, le=100)
    category_scale: float = Field(20.0, gt=0)
    category_weights: dict[Category, float] = Field(
        default_factory=_default_category_weights
    )

    @model_validator(mode="after")
    def _thresholds_ordered(self) -> ValidatorConfig:
        if self.critical_variance < self.max_variance:
            raise ValueError(
                "critical_variance must be >= max_variance"
            )
        _check_category_weights(self.category_weights)
        return self

    @classmethod
    def from_metrics(cls, metrics: MetricsConfig) -> ValidatorConfig:
        """Derive a validator config consistent with ``metrics``."""
        defaults = cls()
        return cls(
            max_variance=metrics.max_score_variance,
            min_confidence=metrics.min_confidence_threshold,
            critical_variance=max(
                defaults.critical_variance, metrics.max_score_variance
            ),
            category_scale=metrics.category_scale,
            category_weights=dict(metrics.category_weights),
        )
