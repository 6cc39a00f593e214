"""Tests for the unified metrics engine."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from agentready.analysis.metrics.config import MetricsConfig
from agentready.analysis.metrics.engine import UnifiedMetricsEngine
from agentready.analysis.static.schemas import WebsiteAnalysis
from agentready.analysis.static.website import website_to_static
from agentready.constants import Category, ContextEfficiency, MetricSource
from tests.conftest import (
    make_assessment,
    make_file_size_analysis,
    make_summary,
)

_STATIC = {
    Category.DOCUMENTATION: 16.0,
    Category.INSTRUCTION_CLARITY: 14.0,
    Category.WORKFLOW_AUTOMATION: 12.0,
    Category.RISK_COMPLIANCE: 14.0,
    Category.INTEGRATION_STRUCTURE: 12.0,
    Category.FILE_SIZE_OPTIMIZATION: 10.0,
}


@pytest.fixture
def engine() -> UnifiedMetricsEngine:
    return UnifiedMetricsEngine()


# ── Static-only ──────────────────────────────────────────────


class TestStaticOnly:
    def test_category_values_follow_rule_table(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        result = engine.create_unified_assessment(make_summary(), None)
        for category, expected in _STATIC.items():
            score = result.categories[category].score
            assert score.value == expected
            assert score.source == MetricSource.STATIC
            assert score.metadata.static_value == expected
            assert score.metadata.ai_value is None

    def test_single_source_confidence_penalty(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        result = engine.create_unified_assessment(make_summary(), None)
        doc = result.categories[Category.DOCUMENTATION].score
        fs = result.categories[Category.FILE_SIZE_OPTIMIZATION].score
        assert doc.confidence == pytest.approx(60.0)
        # Neutral file-size default starts at 50
        assert fs.confidence == pytest.approx(30.0)

    def test_overall_roll_up(self, engine: UnifiedMetricsEngine) -> None:
        result = engine.create_unified_assessment(make_summary(), None)
        assert result.overall_score.value == 67
        assert result.overall_score.confidence == pytest.approx(57.0)
        assert result.overall_score.source == MetricSource.STATIC
        assert result.assessment_status.hybrid_mode is False
        assert result.assessment_status.total_files == 120

    def test_missing_rules_become_findings(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        result = engine.create_unified_assessment(make_summary(), None)
        doc = result.categories[Category.DOCUMENTATION]
        assert doc.findings == ["Missing AGENTS.md file"]
        assert doc.recommendations == [
            "Add AGENTS.md with AI agent specific instructions"
        ]


# ── Hybrid combination ───────────────────────────────────────


class TestHybrid:
    def test_weighted_value_and_source(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        result = engine.create_unified_assessment(
            make_summary(), make_assessment(15.0)
        )
        doc = result.categories[Category.DOCUMENTATION].score
        assert doc.source == MetricSource.HYBRID
        assert doc.value == pytest.approx(15.3)
        assert doc.metadata.variance == pytest.approx(1.0)
        assert doc.metadata.is_validated is True
        assert result.overall_score.value == 73
        assert result.overall_score.source == MetricSource.HYBRID

    @pytest.mark.parametrize("ai_value", [0.0, 3.5, 7.5, 12.25, 20.0])
    def test_convexity(
        self, engine: UnifiedMetricsEngine, ai_value: float
    ) -> None:
        result = engine.create_unified_assessment(
            make_summary(), make_assessment(ai_value)
        )
        for category, cat in result.categories.items():
            static = _STATIC[category]
            low, high = min(static, ai_value), max(static, ai_value)
            assert low - 1e-9 <= cat.score.value <= high + 1e-9

    @pytest.mark.parametrize("ai_value", [0.0, 9.0, 20.0])
    def test_variance_is_absolute_difference(
        self, engine: UnifiedMetricsEngine, ai_value: float
    ) -> None:
        result = engine.create_unified_assessment(
            make_summary(), make_assessment(ai_value)
        )
        for category, cat in result.categories.items():
            meta = cat.score.metadata
            assert meta.variance == abs(_STATIC[category] - ai_value)

    def test_validated_flag_at_variance_boundary(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        # Documentation static is 16
        at_limit = engine.create_unified_assessment(
            make_summary(), make_assessment(10.0, documentation=1.0)
        )
        over_limit = engine.create_unified_assessment(
            make_summary(), make_assessment(10.0, documentation=0.5)
        )
        assert at_limit.categories[
            Category.DOCUMENTATION
        ].score.metadata.is_validated is True
        assert over_limit.categories[
            Category.DOCUMENTATION
        ].score.metadata.is_validated is False

    def test_validated_flag_for_decimal_pair_at_limit(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        metric = engine.combine(16.1, 80.0, 1.1, 80.0)
        assert metric.metadata.variance == 15.0
        assert metric.metadata.is_validated is True
        over = engine.combine(16.11, 80.0, 1.1, 80.0)
        assert over.metadata.is_validated is False

    def test_hybrid_confidence_formula(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        result = engine.create_unified_assessment(
            make_summary(), make_assessment(15.0, confidence=80.0)
        )
        doc = result.categories[Category.DOCUMENTATION].score
        fs = result.categories[Category.FILE_SIZE_OPTIMIZATION].score
        # 0.3*80 + 0.7*80 + 10 - 30*1/15
        assert doc.confidence == pytest.approx(88.0)
        # 0.3*50 + 0.7*80 + 10 - 30*5/15
        assert fs.confidence == pytest.approx(71.0)

    def test_missing_ai_confidence_uses_default(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        result = engine.create_unified_assessment(
            make_summary(), make_assessment(16.0, confidence=None)
        )
        doc = result.categories[Category.DOCUMENTATION].score
        # 0.3*80 + 0.7*70 + 10, no variance
        assert doc.confidence == pytest.approx(83.0)

    def test_confidence_clamped_to_floor(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        result = engine.create_unified_assessment(
            make_summary(), make_assessment(0.0, confidence=0.0)
        )
        doc = result.categories[Category.DOCUMENTATION].score
        assert doc.confidence == 10.0

    @pytest.mark.parametrize("ai_value", [0.0, 20.0])
    def test_range_safety(
        self, engine: UnifiedMetricsEngine, ai_value: float
    ) -> None:
        summary = make_summary(has_agents_doc=True, has_tests=True)
        result = engine.create_unified_assessment(
            summary, make_assessment(ai_value, confidence=100.0)
        )
        for cat in result.categories.values():
            assert 0 <= cat.score.value <= 20
            assert 10 <= cat.score.confidence <= 100
        assert 0 <= result.overall_score.value <= 100
        assert 0 <= result.overall_score.confidence <= 100


# ── File size ────────────────────────────────────────────────


class TestFileSize:
    def test_penalties_and_efficiency(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        fsa = make_file_size_analysis(
            overall=80, large=2, non_optimal_critical=1
        )
        result = engine.create_unified_assessment(make_summary(), None, fsa)
        score = result.categories[Category.FILE_SIZE_OPTIMIZATION].score
        # 16 - 2 - 2 + 1
        assert score.value == 13.0
        assert score.confidence == pytest.approx(60.0)

    def test_penalties_are_capped(self, engine: UnifiedMetricsEngine) -> None:
        fsa = make_file_size_analysis(
            overall=100,
            large=10,
            non_optimal_critical=5,
            efficiency=ContextEfficiency.MODERATE,
        )
        result = engine.create_unified_assessment(make_summary(), None, fsa)
        score = result.categories[Category.FILE_SIZE_OPTIMIZATION].score
        assert score.value == 10.0

    def test_clamped_to_category_range(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        best = make_file_size_analysis(
            overall=100, efficiency=ContextEfficiency.EXCELLENT
        )
        worst = make_file_size_analysis(
            overall=5, efficiency=ContextEfficiency.POOR
        )
        high = engine.create_unified_assessment(make_summary(), None, best)
        low = engine.create_unified_assessment(make_summary(), None, worst)
        fs = Category.FILE_SIZE_OPTIMIZATION
        assert high.categories[fs].score.value == 20.0
        assert low.categories[fs].score.value == 0.0

    def test_analysis_defaults_to_summary(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        summary = make_summary(
            file_size_analysis=make_file_size_analysis(overall=50)
        )
        result = engine.create_unified_assessment(summary, None)
        cat = result.categories[Category.FILE_SIZE_OPTIMIZATION]
        # 10 + 1 (good efficiency)
        assert cat.score.value == 11.0
        assert set(cat.sub_metrics) == {
            "agent_compatibility",
            "large_files",
            "critical_files",
            "context_efficiency",
        }
        assert cat.sub_metrics["agent_compatibility"].value == 10.0

    def test_large_file_findings(self, engine: UnifiedMetricsEngine) -> None:
        fsa = make_file_size_analysis(large=3)
        result = engine.create_unified_assessment(make_summary(), None, fsa)
        cat = result.categories[Category.FILE_SIZE_OPTIMIZATION]
        assert "3 file(s) exceed agent file size limits" in cat.findings


# ── Findings, sub-metrics, insights ──────────────────────────


class TestFindingsAndSubMetrics:
    def test_findings_deduplicated_in_order(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        ai = make_assessment(
            15.0,
            category_findings={
                "documentation": [
                    "Missing AGENTS.md file",
                    "Docs are sparse",
                    "Docs are sparse",
                ]
            },
            category_recommendations={
                "documentation": ["Write a tutorial"]
            },
        )
        result = engine.create_unified_assessment(make_summary(), ai)
        doc = result.categories[Category.DOCUMENTATION]
        assert doc.findings == ["Missing AGENTS.md file", "Docs are sparse"]
        assert doc.recommendations == [
            "Add AGENTS.md with AI agent specific instructions",
            "Write a tutorial",
        ]

    def test_sub_metrics_per_rule(self, engine: UnifiedMetricsEngine) -> None:
        result = engine.create_unified_assessment(make_summary(), None)
        subs = result.categories[Category.DOCUMENTATION].sub_metrics
        assert set(subs) == {"readme", "contributing", "agents_doc", "license"}
        assert subs["readme"].value == 20.0
        assert subs["agents_doc"].value == 0.0

    def test_ai_sub_scores_merge(self, engine: UnifiedMetricsEngine) -> None:
        ai = make_assessment(
            15.0,
            sub_scores={"documentation": {"readme": 18, "examples": 12}},
        )
        result = engine.create_unified_assessment(make_summary(), ai)
        subs = result.categories[Category.DOCUMENTATION].sub_metrics
        assert subs["readme"].source == MetricSource.HYBRID
        assert subs["readme"].metadata.variance == pytest.approx(2.0)
        assert subs["examples"].source == MetricSource.AI
        assert subs["examples"].value == 12.0


class TestInsights:
    def test_band_findings_and_focus(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        bare = make_summary(
            has_readme=False,
            has_contributing=False,
            has_license=False,
            has_workflows=False,
            has_error_handling=False,
            languages=[],
        )
        result = engine.create_unified_assessment(bare, None)
        assert "Documentation score is very low (0.0/20)" in (
            result.insights.findings
        )
        assert "Focus on improving Documentation" in (
            result.insights.recommendations
        )

    def test_excellent_band(self, engine: UnifiedMetricsEngine) -> None:
        result = engine.create_unified_assessment(make_summary(), None)
        assert "Documentation score is excellent (16.0/20)" in (
            result.insights.findings
        )

    def test_ai_global_insights_and_low_confidence(
        self, engine: UnifiedMetricsEngine
    ) -> None:
        ai = make_assessment(
            15.0,
            confidence=40.0,
            findings=["Clear build steps"],
            recommendations=["Add AGENTS.md", "Add AGENTS.md"],
        )
        result = engine.create_unified_assessment(make_summary(), ai)
        assert "Clear build steps" in result.insights.findings
        assert result.insights.recommendations.count("Add AGENTS.md") == 1
        assert any(
            f.startswith("Low AI confidence for: Documentation")
            for f in result.insights.findings
        )


# ── Website ──────────────────────────────────────────────────


def test_website_rule_table(website_analysis: WebsiteAnalysis) -> None:
    engine = UnifiedMetricsEngine()
    summary = website_to_static(website_analysis)
    result = engine.create_unified_assessment(summary, None)
    values = {c: cat.score.value for c, cat in result.categories.items()}
    assert values == {
        Category.DOCUMENTATION: 15.0,
        Category.INSTRUCTION_CLARITY: 17.0,
        Category.WORKFLOW_AUTOMATION: 18.0,
        Category.RISK_COMPLIANCE: 18.0,
        Category.INTEGRATION_STRUCTURE: 12.0,
        Category.FILE_SIZE_OPTIMIZATION: 20.0,
    }
    assert result.assessment_status.kind == "website"


# ── Config ───────────────────────────────────────────────────


class TestMetricsConfig:
    def test_source_weights_must_sum_to_one(self) -> None:
        with pytest.raises(ValidationError, match="must equal 1"):
            MetricsConfig(static_weight=0.5, ai_weight=0.6)

    def test_category_weights_must_cover_all(self) -> None:
        with pytest.raises(ValidationError, match="missing"):
            MetricsConfig(category_weights={Category.DOCUMENTATION: 1.0})

    def test_custom_weights_change_combination(self) -> None:
        engine = UnifiedMetricsEngine(
            MetricsConfig(static_weight=0.5, ai_weight=0.5)
        )
        result = engine.create_unified_assessment(
            make_summary(), make_assessment(10.0)
        )
        doc = result.categories[Category.DOCUMENTATION].score
        assert doc.value == pytest.approx(13.0)

    def test_config_is_frozen(self) -> None:
        cfg = MetricsConfig()
        with pytest.raises(ValidationError):
            cfg.static_weight = 0.9  # type: ignore[misc]
