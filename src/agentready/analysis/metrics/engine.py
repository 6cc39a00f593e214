"""Unified metrics engine: merge static and AI scores per category."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from agentready.analysis.llm.schemas import AIAssessment
from agentready.analysis.metrics.config import MetricsConfig
from agentready.analysis.metrics.rules import (
    RULE_POINTS_SCALE,
    CategoryEvaluation,
    score_category,
)
from agentready.analysis.metrics.schemas import (
    AssessmentStatus,
    Insights,
    MetricMetadata,
    UnifiedAssessmentResult,
    UnifiedCategoryScore,
    UnifiedMetric,
    score_variance,
)
from agentready.analysis.static.schemas import (
    FileSizeAnalysis,
    StaticAnalysisSummary,
)
from agentready.constants import (
    CATEGORY_TITLES,
    SCORE_BAND_EXCELLENT,
    SCORE_BAND_LOW,
    SCORE_BAND_VERY_LOW,
    Category,
    Confidence,
    MetricSource,
)

logger = logging.getLogger(__name__)


def _dedupe(items: Iterable[str]) -> list[str]:
    """Exact-string de-duplication, first-seen order."""
    return list(dict.fromkeys(items))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class UnifiedMetricsEngine:
    """Combines static and AI category scores into one result tree.

    Stateless apart from its immutable config, so one instance can
    serve any number of concurrent requests.
    """

    def __init__(self, config: MetricsConfig | None = None) -> None:
        self._config = config or MetricsConfig()

    @property
    def config(self) -> MetricsConfig:
        return self._config

    def create_unified_assessment(
        self,
        static_analysis: StaticAnalysisSummary,
        ai_analysis: AIAssessment | None,
        file_size_analysis: FileSizeAnalysis | None = None,
    ) -> UnifiedAssessmentResult:
        """Build the unified result for one assessment.

        ``file_size_analysis`` defaults to the one carried by the
        summary. With ``ai_analysis=None`` every metric is static-only.
        """
        fsa = file_size_analysis or static_analysis.file_size_analysis
        categories: dict[Category, UnifiedCategoryScore] = {}
        for category in Category:
            evaluation = score_category(
                static_analysis,
                category,
                fsa,
                self._config.category_scale,
            )
            categories[category] = self._category_score(
                category, evaluation, ai_analysis
            )

        hybrid = ai_analysis is not None
        result = UnifiedAssessmentResult(
            overall_score=self._overall(categories),
            categories=categories,
            assessment_status=AssessmentStatus(
                kind=static_analysis.kind,
                static_analysis_enabled=True,
                ai_analysis_enabled=hybrid,
                hybrid_mode=hybrid,
                total_files=static_analysis.file_count,
            ),
            insights=self._insights(categories, ai_analysis),
        )
        logger.debug(
            "event=unified_assessment_created kind=%s overall=%s hybrid=%s",
            static_analysis.kind,
            result.overall_score.value,
            hybrid,
        )
        return result

    # ── Combination ─────────────────────────────────────

    def combine(
        self,
        static_value: float | None,
        static_confidence: float,
        ai_value: float | None,
        ai_confidence: float,
        *,
        max_variance: float | None = None,
    ) -> UnifiedMetric:
        """Merge one static and one AI value into a unified metric.

        Either side may be missing; both missing is a programming error.
        """
        cfg = self._config
        limit = max_variance if max_variance is not None else (
            cfg.max_score_variance
        )
        if static_value is not None and ai_value is not None:
            variance = score_variance(static_value, ai_value)
            value = (
                static_value * cfg.static_weight
                + ai_value * cfg.ai_weight
            )
            confidence = (
                cfg.static_weight * static_confidence
                + cfg.ai_weight * ai_confidence
                + Confidence.HYBRID_BONUS
                - Confidence.MAX_VARIANCE_PENALTY * variance / limit
            )
            return UnifiedMetric(
                value=value,
                confidence=_clamp(
                    confidence, Confidence.FLOOR, Confidence.CEILING
                ),
                source=MetricSource.HYBRID,
                metadata=MetricMetadata(
                    static_value=static_value,
                    ai_value=ai_value,
                    variance=variance,
                    is_validated=variance <= limit,
                ),
            )
        if static_value is not None:
            return UnifiedMetric(
                value=static_value,
                confidence=_clamp(
                    static_confidence - Confidence.SINGLE_SOURCE_PENALTY,
                    Confidence.FLOOR,
                    Confidence.CEILING,
                ),
                source=MetricSource.STATIC,
                metadata=MetricMetadata(static_value=static_value),
            )
        if ai_value is not None:
            return UnifiedMetric(
                value=ai_value,
                confidence=_clamp(
                    ai_confidence - Confidence.SINGLE_SOURCE_PENALTY,
                    Confidence.FLOOR,
                    Confidence.CEILING,
                ),
                source=MetricSource.AI,
                metadata=MetricMetadata(ai_value=ai_value),
            )
        raise ValueError("combine() needs at least one of static or AI")

    def _ai_factor(self) -> float:
        # Assessor scores are always on the 0-20 scale
        return self._config.category_scale / RULE_POINTS_SCALE

    def _category_score(
        self,
        category: Category,
        evaluation: CategoryEvaluation,
        ai: AIAssessment | None,
    ) -> UnifiedCategoryScore:
        ai_value: float | None = None
        ai_confidence = Confidence.AI_DEFAULT
        ai_subs: dict[str, float] = {}
        ai_findings: list[str] = []
        ai_recommendations: list[str] = []
        if ai is not None:
            factor = self._ai_factor()
            ai_value = ai.categories.as_dict()[category] * factor
            reported = ai.confidence_for(category)
            if reported is not None:
                ai_confidence = reported
            ai_subs = {
                name: value * factor
                for name, value in ai.sub_scores.get(category, {}).items()
            }
            ai_findings = ai.category_findings.get(category, [])
            ai_recommendations = ai.category_recommendations.get(
                category, []
            )

        score = self.combine(
            evaluation.score, evaluation.confidence, ai_value, ai_confidence
        )

        sub_metrics: dict[str, UnifiedMetric] = {}
        for name in _dedupe([*evaluation.sub_scores, *ai_subs]):
            sub_metrics[name] = self.combine(
                evaluation.sub_scores.get(name),
                evaluation.confidence,
                ai_subs.get(name),
                ai_confidence,
            )

        return UnifiedCategoryScore(
            score=score,
            sub_metrics=sub_metrics,
            findings=_dedupe([*evaluation.findings, *ai_findings]),
            recommendations=_dedupe(
                [*evaluation.recommendations, *ai_recommendations]
            ),
        )

    # ── Roll-up ─────────────────────────────────────────

    def _overall(
        self, categories: dict[Category, UnifiedCategoryScore]
    ) -> UnifiedMetric:
        cfg = self._config
        ratio = cfg.overall_scale / cfg.category_scale
        weights = cfg.category_weights

        value = sum(
            cat.score.value * weights[c] * ratio
            for c, cat in categories.items()
        )
        confidence = sum(
            cat.score.confidence * weights[c]
            for c, cat in categories.items()
        )
        value = _clamp(round(value), 0, cfg.overall_scale)
        confidence = _clamp(confidence, 0, Confidence.CEILING)

        metas = {c: cat.score.metadata for c, cat in categories.items()}
        if any(cat.score.is_hybrid for cat in categories.values()):
            static_total = sum(
                (m.static_value or 0.0) * weights[c] * ratio
                for c, m in metas.items()
            )
            ai_total = sum(
                (m.ai_value or 0.0) * weights[c] * ratio
                for c, m in metas.items()
            )
            variance = score_variance(static_total, ai_total)
            return UnifiedMetric(
                value=value,
                confidence=confidence,
                source=MetricSource.HYBRID,
                metadata=MetricMetadata(
                    static_value=static_total,
                    ai_value=ai_total,
                    variance=variance,
                    is_validated=variance <= cfg.max_score_variance * ratio,
                ),
            )

        source = next(iter(categories.values())).score.source
        return UnifiedMetric(
            value=value,
            confidence=confidence,
            source=source,
            metadata=(
                MetricMetadata(static_value=value)
                if source == MetricSource.STATIC
                else MetricMetadata(ai_value=value)
            ),
        )

    def _insights(
        self,
        categories: dict[Category, UnifiedCategoryScore],
        ai: AIAssessment | None,
    ) -> Insights:
        band = self._config.category_scale / RULE_POINTS_SCALE
        findings: list[str] = []
        recommendations: list[str] = []
        for category, cat in categories.items():
            title = CATEGORY_TITLES[category]
            value = cat.score.value
            shown = f"{value:.1f}/{self._config.category_scale:g}"
            if value < SCORE_BAND_VERY_LOW * band:
                findings.append(f"{title} score is very low ({shown})")
            elif value < SCORE_BAND_LOW * band:
                findings.append(f"{title} score is low ({shown})")
            elif value >= SCORE_BAND_EXCELLENT * band:
                findings.append(f"{title} score is excellent ({shown})")
            if value < SCORE_BAND_LOW * band:
                recommendations.append(f"Focus on improving {title}")

        if ai is not None:
            findings.extend(ai.findings)
            recommendations.extend(ai.recommendations)
            low = [
                CATEGORY_TITLES[c]
                for c in Category
                if (conf := ai.confidence_for(c)) is not None
                and conf < self._config.min_confidence_threshold
            ]
            if low:
                findings.append(
                    f"Low AI confidence for: {', '.join(low)}"
                )

        return Insights(
            findings=_dedupe(findings),
            recommendations=_dedupe(recommendations),
        )
