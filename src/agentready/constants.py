"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON payloads,
log lines, dict keys) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Category(StrEnum):
    """The six fixed readiness categories (repositories and websites)."""

    DOCUMENTATION = "documentation"
    INSTRUCTION_CLARITY = "instruction_clarity"
    WORKFLOW_AUTOMATION = "workflow_automation"
    RISK_COMPLIANCE = "risk_compliance"
    INTEGRATION_STRUCTURE = "integration_structure"
    FILE_SIZE_OPTIMIZATION = "file_size_optimization"


class MetricSource(StrEnum):
    """Provenance of a unified metric."""

    STATIC = "static"
    AI = "ai"
    HYBRID = "hybrid"


class AssessmentKind(StrEnum):
    """What is being assessed."""

    REPOSITORY = "repository"
    WEBSITE = "website"


class IssueType(StrEnum):
    """Validation issue categories."""

    VARIANCE = "variance"
    CONFIDENCE = "confidence"
    MISSING_DATA = "missing-data"
    FILE_SIZE_CONSISTENCY = "file-size-consistency"


class IssueSeverity(StrEnum):
    """Validation issue severities, mildest first."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ConfidenceLevel(StrEnum):
    """Qualitative confidence labels for alignment reports."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ContextEfficiency(StrEnum):
    """Context-consumption rating reported by the file size analyzer."""

    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


class StageName(StrEnum):
    """Orchestrator pipeline stages."""

    STATIC_ANALYSIS = "static_analysis"
    AI_ANALYSIS = "ai_analysis"
    MERGE = "merge"
    VALIDATE = "validate"


class StageOutcome(StrEnum):
    """Outcome of an individual pipeline stage execution."""

    COMPLETED = "completed"
    FAILED = "failed"
    FALLBACK = "fallback"
    SKIPPED = "skipped"


CATEGORY_TITLES: dict[Category, str] = {
    Category.DOCUMENTATION: "Documentation",
    Category.INSTRUCTION_CLARITY: "Instruction Clarity",
    Category.WORKFLOW_AUTOMATION: "Workflow Automation",
    Category.RISK_COMPLIANCE: "Risk & Compliance",
    Category.INTEGRATION_STRUCTURE: "Integration & Structure",
    Category.FILE_SIZE_OPTIMIZATION: "File Size Optimization",
}


# ── Confidence Model (0–100 scale) ───────────────────────


class Confidence:
    """Named confidence constants, single source of truth."""

    STATIC_DEFAULT = 80.0  # Deterministic rule table
    STATIC_NEUTRAL_DEFAULT = 50.0  # File size scored without analysis
    AI_DEFAULT = 70.0  # Assessor did not report a confidence
    HYBRID_BONUS = 10.0  # Two agreeing sources beat one
    SINGLE_SOURCE_PENALTY = 20.0
    MAX_VARIANCE_PENALTY = 30.0  # Penalty at variance == max_score_variance
    FLOOR = 10.0
    CEILING = 100.0
    REPOSITORY_FALLBACK = 60.0
    WEBSITE_FALLBACK = 50.0


# ── Score Bands (category scale) ─────────────────────────

SCORE_BAND_VERY_LOW = 5
SCORE_BAND_LOW = 10
SCORE_BAND_EXCELLENT = 16

# ── File Size Scoring ────────────────────────────────────

LARGE_FILE_PENALTY = 1.0
LARGE_FILE_MAX_PENALTY = 4.0
CRITICAL_FILE_PENALTY = 2.0
CRITICAL_FILE_MAX_PENALTY = 6.0
NEUTRAL_FILE_SIZE_SCORE = 10.0

CONTEXT_EFFICIENCY_ADJUSTMENT: dict[ContextEfficiency, float] = {
    ContextEfficiency.EXCELLENT: 2.0,
    ContextEfficiency.GOOD: 1.0,
    ContextEfficiency.MODERATE: 0.0,
    ContextEfficiency.POOR: -2.0,
}

# Static vs AI agent-compatibility gap (percentage points)
FILE_SIZE_COMPATIBILITY_TOLERANCE = 20.0

# ── Website Thresholds ───────────────────────────────────

FAST_PAGE_LOAD_MS = 3000
ACCESSIBILITY_PASS_SCORE = 60
FALLBACK_ACCESSIBILITY_SCORE = 50
SUBSTANTIAL_CONTENT_CHARS = 1000
MIN_INTERNAL_LINKS = 5
BYTES_PER_MB = 1024 * 1024

# ── Alignment Report ─────────────────────────────────────

# Variance is compared on this decimal grid so float noise
# (abs(16.1 - 1.1) == 15.000000000000002) cannot cross a threshold
VARIANCE_DECIMALS = 9
ALIGNMENT_VARIANCE_FACTOR = 5.0  # 1 point of variance = 5 alignment points
ALIGNMENT_SUGGESTION_THRESHOLD = 60.0
HIGH_CONFIDENCE_LEVEL = 80.0
MEDIUM_CONFIDENCE_LEVEL = 60.0

# ── Circuit Breaker Configuration ────────────────────────

CB_LLM_FAILURE_THRESHOLD = 5
CB_LLM_RECOVERY_TIMEOUT = 30

# ── Retry Strategy ───────────────────────────────────────

RETRY_MAX_ATTEMPTS = 3
RETRY_INITIAL_WAIT = 2
RETRY_MAX_WAIT = 30

# ── LLM Output ───────────────────────────────────────────

LLM_MAX_OUTPUT_TOKENS = 2048

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
ID_HEX_LENGTH = 12
KEY_DOCUMENT_MAX_CHARS = 4000
