"""Pydantic models for the generative assessment boundary.

The assessor's contract is strict: category scores are 0–20, the
readiness score and confidences are 0–100. Out-of-range values raise
``ValidationError`` here instead of being clamped downstream.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_snake

from agentready.constants import Category

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def _snake_keys(raw: Any) -> Any:
    """Normalize camelCase category keys coming off the wire."""
    if not isinstance(raw, dict):
        return raw
    items = cast(dict[Any, Any], raw)
    return {to_snake(str(k)): v for k, v in items.items()}


class CategoryScores(BaseModel):
    """The six category scores on the 0–20 category scale."""

    model_config = _WIRE_CONFIG

    documentation: float = Field(ge=0, le=20)
    instruction_clarity: float = Field(ge=0, le=20)
    workflow_automation: float = Field(ge=0, le=20)
    risk_compliance: float = Field(ge=0, le=20)
    integration_structure: float = Field(ge=0, le=20)
    file_size_optimization: float = Field(ge=0, le=20)

    def as_dict(self) -> dict[Category, float]:
        return {c: float(getattr(self, c.value)) for c in Category}

    def total(self) -> float:
        return sum(self.as_dict().values())


class AIAssessment(BaseModel):
    """A generative (or synthesized fallback) readiness assessment."""

    model_config = _WIRE_CONFIG

    readiness_score: float = Field(ge=0, le=100)
    categories: CategoryScores
    findings: list[str] = Field(default_factory=lambda: list[str]())
    recommendations: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    # Per-category confidence (0–100); "overall" may also be present
    confidence: dict[str, float] = Field(
        default_factory=lambda: dict[str, float]()
    )
    category_findings: dict[Category, list[str]] = Field(
        default_factory=lambda: dict[Category, list[str]]()
    )
    category_recommendations: dict[Category, list[str]] = Field(
        default_factory=lambda: dict[Category, list[str]]()
    )
    # Optional detail scores on the 0–20 category scale
    sub_scores: dict[Category, dict[str, float]] = Field(
        default_factory=lambda: dict[Category, dict[str, float]]()
    )

    @field_validator(
        "confidence",
        "category_findings",
        "category_recommendations",
        "sub_scores",
        mode="before",
    )
    @classmethod
    def _normalize_keys(cls, v: Any) -> Any:
        return _snake_keys(v)

    @field_validator("confidence")
    @classmethod
    def _confidence_in_range(cls, v: dict[str, float]) -> dict[str, float]:
        for key, value in v.items():
            if not 0 <= value <= 100:
                raise ValueError(
                    f"confidence for {key} must be within 0-100, "
                    f"got {value}"
                )
        return v

    @field_validator("sub_scores")
    @classmethod
    def _sub_scores_in_range(
        cls, v: dict[Category, dict[str, float]]
    ) -> dict[Category, dict[str, float]]:
        for category, scores in v.items():
            for name, value in scores.items():
                if not 0 <= value <= 20:
                    raise ValueError(
                        f"sub-score {category}.{name} must be within "
                        f"0-20, got {value}"
                    )
        return v

    def confidence_for(self, category: Category) -> float | None:
        return self.confidence.get(category.value)
