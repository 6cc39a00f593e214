"""Cross-validate static and AI scores and quantify their alignment."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from agentready.analysis.metrics.config import ValidatorConfig
from agentready.analysis.metrics.rules import RULE_POINTS_SCALE
from agentready.analysis.metrics.schemas import (
    AlignmentReport,
    UnifiedAssessmentResult,
    UnifiedCategoryScore,
    UnifiedMetric,
    ValidationIssue,
    ValidationResult,
    score_variance,
)
from agentready.analysis.static.schemas import FileSizeAnalysis
from agentready.constants import (
    ALIGNMENT_SUGGESTION_THRESHOLD,
    ALIGNMENT_VARIANCE_FACTOR,
    CATEGORY_TITLES,
    FILE_SIZE_COMPATIBILITY_TOLERANCE,
    HIGH_CONFIDENCE_LEVEL,
    MEDIUM_CONFIDENCE_LEVEL,
    SCORE_BAND_EXCELLENT,
    Category,
    ConfidenceLevel,
    IssueSeverity,
    IssueType,
)

logger = logging.getLogger(__name__)


def _comparable(
    categories: Mapping[Category, UnifiedCategoryScore],
) -> dict[Category, float]:
    """Variance per category that carries both a static and an AI side."""
    out: dict[Category, float] = {}
    for category, cat in categories.items():
        meta = cat.score.metadata
        if meta.static_value is None or meta.ai_value is None:
            continue
        out[category] = score_variance(meta.static_value, meta.ai_value)
    return out


class MetricsValidator:
    """Stateless checks over a unified assessment.

    Boundaries: a variance equal to ``max_variance`` passes, anything
    above it is ``high``; a variance at or above ``critical_variance``
    is ``critical``. A category missing a side is reported once as
    missing data and never also as a variance issue.
    """

    def __init__(self, config: ValidatorConfig | None = None) -> None:
        self._config = config or ValidatorConfig()

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    def validate_metric(
        self,
        metric_name: str,
        static_value: float,
        ai_value: float,
        confidence: float,
    ) -> list[ValidationIssue]:
        cfg = self._config
        issues: list[ValidationIssue] = []
        variance = score_variance(static_value, ai_value)
        if variance >= cfg.critical_variance:
            issues.append(
                ValidationIssue(
                    type=IssueType.VARIANCE,
                    severity=IssueSeverity.CRITICAL,
                    metric=metric_name,
                    message=(
                        f"Critical variance in {metric_name}: static "
                        f"{static_value:.1f} vs AI {ai_value:.1f} "
                        f"({variance:.1f} points)"
                    ),
                    static_value=static_value,
                    ai_value=ai_value,
                    variance=variance,
                )
            )
        elif variance > cfg.max_variance:
            issues.append(
                ValidationIssue(
                    type=IssueType.VARIANCE,
                    severity=IssueSeverity.HIGH,
                    metric=metric_name,
                    message=(
                        f"High variance in {metric_name}: static "
                        f"{static_value:.1f} vs AI {ai_value:.1f} "
                        f"({variance:.1f} points)"
                    ),
                    static_value=static_value,
                    ai_value=ai_value,
                    variance=variance,
                )
            )
        issues.extend(self._confidence_issues(metric_name, confidence))
        return issues

    def _confidence_issues(
        self, metric_name: str, confidence: float
    ) -> list[ValidationIssue]:
        if confidence >= self._config.low_confidence_threshold:
            return []
        return [
            ValidationIssue(
                type=IssueType.CONFIDENCE,
                severity=IssueSeverity.MEDIUM,
                metric=metric_name,
                message=(
                    f"Low confidence in {metric_name} ({confidence:.0f}%)"
                ),
            )
        ]

    def validate_category_scores(
        self,
        categories: Mapping[Category, UnifiedCategoryScore],
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for category, cat in categories.items():
            meta = cat.score.metadata
            if meta.static_value is None or meta.ai_value is None:
                issues.append(
                    ValidationIssue(
                        type=IssueType.MISSING_DATA,
                        severity=IssueSeverity.LOW,
                        metric=category.value,
                        message=(
                            f"Missing static or AI score for {category.value}"
                        ),
                        static_value=meta.static_value,
                        ai_value=meta.ai_value,
                    )
                )
                continue
            issues.extend(
                self.validate_metric(
                    category.value,
                    meta.static_value,
                    meta.ai_value,
                    cat.score.confidence,
                )
            )
        return issues

    def validate_sub_metrics(
        self,
        category_name: str,
        sub_metrics: Mapping[str, UnifiedMetric],
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for name, metric in sub_metrics.items():
            full_name = f"{category_name}.{name}"
            meta = metric.metadata
            if (
                metric.is_hybrid
                and meta.static_value is not None
                and meta.ai_value is not None
            ):
                issues.extend(
                    self.validate_metric(
                        full_name,
                        meta.static_value,
                        meta.ai_value,
                        metric.confidence,
                    )
                )
            else:
                issues.extend(
                    self._confidence_issues(full_name, metric.confidence)
                )
        return issues

    def validate_overall_assessment(
        self,
        overall_score: UnifiedMetric,
        categories: Mapping[Category, UnifiedCategoryScore],
    ) -> ValidationResult:
        """Validate every category and compute the alignment score.

        Alignment is 100 minus the weighted mean variance, as a
        percentage of the category scale, over comparable categories.
        With nothing comparable there is no evidence of agreement and
        alignment is 0.
        """
        alignment = self._alignment_score(categories)
        issues = self.validate_category_scores(categories)
        issues.extend(
            self._confidence_issues("overall", overall_score.confidence)
        )
        return self._result(issues, alignment)

    def _alignment_score(
        self, categories: Mapping[Category, UnifiedCategoryScore]
    ) -> float:
        cfg = self._config
        variances = _comparable(categories)
        if not variances:
            return 0.0
        weights = {
            c: cfg.category_weights.get(c, 0.0) for c in variances
        }
        total = sum(weights.values())
        if total <= 0:
            weights = dict.fromkeys(variances, 1.0)
            total = float(len(variances))
        mean_pct = sum(
            variances[c] / cfg.category_scale * 100 * weights[c]
            for c in variances
        ) / total
        return max(0.0, min(100.0, 100.0 - mean_pct))

    def _result(
        self, issues: list[ValidationIssue], alignment: float
    ) -> ValidationResult:
        has_critical = any(
            i.severity == IssueSeverity.CRITICAL for i in issues
        )
        is_valid = (
            not has_critical and alignment >= self._config.min_confidence
        )
        result = ValidationResult(
            is_valid=is_valid,
            alignment_score=alignment,
            issues=issues,
            recommendations=self._recommendations(issues, alignment),
        )
        logger.debug(
            "event=validation_complete valid=%s alignment=%.1f issues=%d",
            is_valid,
            alignment,
            len(issues),
        )
        return result

    def _recommendations(
        self, issues: list[ValidationIssue], alignment: float
    ) -> list[str]:
        recs: list[str] = []
        for issue in issues:
            match issue.type:
                case IssueType.VARIANCE:
                    recs.append(
                        f"Review {issue.metric} scoring: static and AI "
                        f"assessments disagree by {issue.variance:.1f} points"
                    )
                case IssueType.CONFIDENCE:
                    recs.append(
                        f"Gather more evidence for {issue.metric} "
                        f"to raise confidence"
                    )
                case IssueType.MISSING_DATA:
                    recs.append(
                        f"Provide both static and AI scores for {issue.metric}"
                    )
                case IssueType.FILE_SIZE_CONSISTENCY:
                    recs.append(
                        f"Reconcile the file size analysis with the AI "
                        f"assessment of {issue.metric}"
                    )
        if alignment < self._config.min_confidence:
            recs.append(
                f"Overall alignment {alignment:.1f} is below the "
                f"{self._config.min_confidence:.0f} threshold; re-run the "
                f"AI assessment or review the static rules"
            )
        return list(dict.fromkeys(recs))

    # ── File size consistency ───────────────────────────

    def validate_file_size_consistency(
        self,
        file_size_analysis: FileSizeAnalysis,
        ai_score: float,
    ) -> list[ValidationIssue]:
        """Compare static agent compatibility with the AI file-size score."""
        cfg = self._config
        metric = Category.FILE_SIZE_OPTIMIZATION.value
        static_pct = file_size_analysis.agent_compatibility.overall
        ai_pct = ai_score / cfg.category_scale * 100
        gap = score_variance(static_pct, ai_pct)
        issues: list[ValidationIssue] = []
        if gap > FILE_SIZE_COMPATIBILITY_TOLERANCE:
            issues.append(
                ValidationIssue(
                    type=IssueType.FILE_SIZE_CONSISTENCY,
                    severity=IssueSeverity.HIGH,
                    metric=metric,
                    message=(
                        f"File size agent compatibility ({static_pct:.0f}%) "
                        f"disagrees with AI score ({ai_pct:.0f}%)"
                    ),
                    static_value=static_pct,
                    ai_value=ai_pct,
                    variance=gap,
                )
            )
        excellent = SCORE_BAND_EXCELLENT * cfg.category_scale / RULE_POINTS_SCALE
        large = len(file_size_analysis.large_files)
        if ai_score >= excellent and large:
            issues.append(
                ValidationIssue(
                    type=IssueType.FILE_SIZE_CONSISTENCY,
                    severity=IssueSeverity.MEDIUM,
                    metric=metric,
                    message=(
                        f"AI rated file size optimization highly "
                        f"({ai_score:.1f}) but {large} large file(s) exist"
                    ),
                    ai_value=ai_score,
                )
            )
        return issues

    def validate_assessment(
        self,
        result: UnifiedAssessmentResult,
        file_size_analysis: FileSizeAnalysis | None = None,
    ) -> ValidationResult:
        """Full validation of a unified result, file size included."""
        base = self.validate_overall_assessment(
            result.overall_score, result.categories
        )
        issues = list(base.issues)
        fs_score = result.categories[Category.FILE_SIZE_OPTIMIZATION].score
        ai_value = fs_score.metadata.ai_value
        if (
            file_size_analysis is not None
            and fs_score.is_hybrid
            and ai_value is not None
        ):
            issues.extend(
                self.validate_file_size_consistency(
                    file_size_analysis, ai_value
                )
            )
        return self._result(issues, base.alignment_score)

    # ── Alignment report ────────────────────────────────

    def generate_alignment_report(
        self,
        categories: Mapping[Category, UnifiedCategoryScore],
    ) -> AlignmentReport:
        cfg = self._config
        variances = _comparable(categories)
        alignments: dict[str, float] = {}
        critical: list[ValidationIssue] = []
        suggestions: list[str] = []
        for category, variance in variances.items():
            aligned = max(
                0.0, min(100.0, 100.0 - variance * ALIGNMENT_VARIANCE_FACTOR)
            )
            alignments[category.value] = aligned
            meta = categories[category].score.metadata
            if variance > 2 * cfg.max_variance:
                critical.append(
                    ValidationIssue(
                        type=IssueType.VARIANCE,
                        severity=IssueSeverity.CRITICAL,
                        metric=category.value,
                        message=(
                            f"Extreme variance in {category.value} "
                            f"({variance:.1f} points)"
                        ),
                        static_value=meta.static_value,
                        ai_value=meta.ai_value,
                        variance=variance,
                    )
                )
            if aligned < ALIGNMENT_SUGGESTION_THRESHOLD:
                suggestions.append(
                    f"Improve alignment for {CATEGORY_TITLES[category]}: "
                    f"static and AI scores differ by {variance:.1f} points"
                )

        overall = (
            sum(alignments.values()) / len(alignments) if alignments else 0.0
        )
        confidences = [cat.score.confidence for cat in categories.values()]
        mean_conf = (
            sum(confidences) / len(confidences) if confidences else 0.0
        )
        if mean_conf >= HIGH_CONFIDENCE_LEVEL:
            level = ConfidenceLevel.HIGH
        elif mean_conf >= MEDIUM_CONFIDENCE_LEVEL:
            level = ConfidenceLevel.MEDIUM
        else:
            level = ConfidenceLevel.LOW

        return AlignmentReport(
            overall_alignment=overall,
            category_alignments=alignments,
            critical_issues=critical,
            improvement_suggestions=suggestions,
            confidence_level=level,
        )
