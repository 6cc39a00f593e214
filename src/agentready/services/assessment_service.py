"""Aligned assessment orchestration: static → AI (retried) → merge → validate."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from agentready.analysis.fallback import repository_fallback, website_fallback
from agentready.analysis.llm.schemas import AIAssessment
from agentready.analysis.metrics.config import MetricsConfig, ValidatorConfig
from agentready.analysis.metrics.engine import UnifiedMetricsEngine
from agentready.analysis.metrics.schemas import (
    UnifiedAssessmentResult,
    ValidationIssue,
    ValidationResult,
)
from agentready.analysis.metrics.validator import MetricsValidator
from agentready.analysis.static.schemas import StaticAnalysisSummary
from agentready.analysis.static.website import website_to_static
from agentready.config import Settings
from agentready.constants import ID_HEX_LENGTH, StageName, StageOutcome
from agentready.logger import AssessmentLogger
from agentready.resilience.errors import (
    AIAssessmentError,
    AlignmentError,
    classify_error,
    is_permanent,
    should_retry,
)
from agentready.services.protocols import AIAssessor, StaticAnalyzer

logger = logging.getLogger(__name__)

type AssessmentCall = Callable[
    [], Awaitable[AIAssessment | Mapping[str, Any]]
]
type FallbackBuilder = Callable[[StaticAnalysisSummary], AIAssessment]


@dataclass(frozen=True)
class AlignedAssessmentConfig:
    """Retry, fallback and validation policy for one engine instance."""

    enable_validation: bool = True
    require_alignment: bool = False
    max_retries: int = 2
    fallback_to_static: bool = True
    metrics_config: MetricsConfig = field(default_factory=MetricsConfig)
    # Derived from metrics_config when omitted
    validator_config: ValidatorConfig | None = None
    # Per AI attempt; None disables the deadline
    attempt_timeout_seconds: float | None = 60.0
    retry_initial_wait: float = 1.0
    retry_max_wait: float = 10.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.retry_initial_wait < 0 or self.retry_max_wait < 0:
            raise ValueError("retry waits must be >= 0")

    @classmethod
    def from_settings(cls, settings: Settings) -> AlignedAssessmentConfig:
        metrics = MetricsConfig(
            static_weight=settings.static_weight,
            ai_weight=settings.ai_weight,
            max_score_variance=settings.max_score_variance,
            min_confidence_threshold=settings.min_confidence_threshold,
        )
        return cls(
            enable_validation=settings.assessment_enable_validation,
            require_alignment=settings.assessment_require_alignment,
            max_retries=settings.assessment_max_retries,
            fallback_to_static=settings.assessment_fallback_to_static,
            metrics_config=metrics,
            attempt_timeout_seconds=(
                settings.assessment_attempt_timeout_seconds
            ),
            retry_initial_wait=settings.retry_initial_wait,
            retry_max_wait=settings.retry_max_wait,
        )


class ValidationSummary(BaseModel):
    passed: bool = True
    alignment_score: float = 100.0
    issues: list[ValidationIssue] = Field(
        default_factory=lambda: list[ValidationIssue]()
    )
    recommendations: list[str] = Field(
        default_factory=lambda: list[str]()
    )

    @classmethod
    def from_result(cls, result: ValidationResult) -> ValidationSummary:
        return cls(
            passed=result.is_valid,
            alignment_score=result.alignment_score,
            issues=list(result.issues),
            recommendations=list(result.recommendations),
        )


class AssessmentMetadata(BaseModel):
    request_id: str = ""
    static_analysis_time_ms: float = 0.0
    ai_analysis_time_ms: float = 0.0
    total_analysis_time_ms: float = 0.0
    # Failed AI attempts before success or exhaustion
    retry_count: int = 0
    fallback_used: bool = False


class AlignedAssessmentResult(UnifiedAssessmentResult):
    """Unified result annotated with validation and run metadata."""

    validation: ValidationSummary = Field(default_factory=ValidationSummary)
    assessment_metadata: AssessmentMetadata = Field(
        default_factory=AssessmentMetadata
    )


@dataclass
class _AIOutcome:
    assessment: AIAssessment | None
    failures: int
    error: Exception | None
    duration_ms: float


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000


class AlignedAssessmentEngine:
    """Runs one assessment end to end.

    Static analysis runs once and its failures propagate unchanged.
    The AI assessment is retried up to ``max_retries`` times with
    exponential back-off; on exhaustion a deterministic fallback is
    substituted when ``fallback_to_static`` is set, otherwise the last
    AI error is re-raised.
    """

    def __init__(
        self,
        static_analyzer: StaticAnalyzer,
        ai_assessor: AIAssessor,
        config: AlignedAssessmentConfig | None = None,
        *,
        audit_logger: AssessmentLogger | None = None,
    ) -> None:
        self._static = static_analyzer
        self._ai = ai_assessor
        self._config = config or AlignedAssessmentConfig()
        self._audit = audit_logger
        self._metrics = UnifiedMetricsEngine(self._config.metrics_config)
        self._validator = MetricsValidator(
            self._config.validator_config
            or ValidatorConfig.from_metrics(self._config.metrics_config)
        )

    @property
    def config(self) -> AlignedAssessmentConfig:
        return self._config

    async def assess_repository(self, url: str) -> AlignedAssessmentResult:
        request_id = uuid.uuid4().hex[:ID_HEX_LENGTH]
        t0 = time.monotonic()
        summary, static_ms = await self._static_stage(
            request_id, lambda: self._static.analyze_repository(url)
        )
        return await self._complete(
            request_id,
            t0,
            summary,
            static_ms,
            lambda: self._ai.assess_repository(summary),
            repository_fallback,
        )

    async def assess_website(self, url: str) -> AlignedAssessmentResult:
        request_id = uuid.uuid4().hex[:ID_HEX_LENGTH]
        t0 = time.monotonic()
        analysis, static_ms = await self._static_stage(
            request_id, lambda: self._static.analyze_website(url)
        )
        summary = website_to_static(analysis)
        flows = dict(analysis.agentic_flows)
        return await self._complete(
            request_id,
            t0,
            summary,
            static_ms,
            lambda: self._ai.assess_website(summary, flows),
            website_fallback,
        )

    # -- Pipeline stages --

    def _record_stage(
        self,
        request_id: str,
        stage: StageName,
        outcome: StageOutcome,
        duration_ms: float,
        error: str | None = None,
    ) -> None:
        if self._audit is not None:
            self._audit.log_stage(
                request_id, stage, outcome, duration_ms, error
            )

    async def _static_stage[T](
        self,
        request_id: str,
        call: Callable[[], Awaitable[T]],
    ) -> tuple[T, float]:
        start = time.monotonic()
        try:
            result = await call()
        except Exception as exc:
            duration = _elapsed_ms(start)
            logger.error(
                "event=static_analysis_failed request_id=%s error=%s",
                request_id,
                exc,
            )
            self._record_stage(
                request_id,
                StageName.STATIC_ANALYSIS,
                StageOutcome.FAILED,
                duration,
                str(exc),
            )
            if self._audit is not None:
                self._audit.log_error(
                    request_id, StageName.STATIC_ANALYSIS, str(exc)
                )
            raise
        duration = _elapsed_ms(start)
        self._record_stage(
            request_id,
            StageName.STATIC_ANALYSIS,
            StageOutcome.COMPLETED,
            duration,
        )
        return result, duration

    async def _attempt(self, call: AssessmentCall) -> AIAssessment:
        raw = await asyncio.wait_for(
            call(), timeout=self._config.attempt_timeout_seconds
        )
        if isinstance(raw, AIAssessment):
            return raw
        return AIAssessment.model_validate(raw)

    async def _ai_stage(
        self, request_id: str, call: AssessmentCall
    ) -> _AIOutcome:
        cfg = self._config
        start = time.monotonic()
        failures = 0
        assessment: AIAssessment | None = None
        retrying = AsyncRetrying(
            stop=stop_after_attempt(cfg.max_retries + 1),
            wait=wait_exponential(
                multiplier=cfg.retry_initial_wait, max=cfg.retry_max_wait
            ),
            retry=retry_if_exception(should_retry),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    try:
                        assessment = await self._attempt(call)
                    except Exception as exc:
                        failures += 1
                        logger.warning(
                            "event=ai_attempt_failed request_id=%s "
                            "attempt=%d error_class=%s permanent=%s error=%s",
                            request_id,
                            failures,
                            classify_error(exc).value,
                            is_permanent(exc),
                            exc,
                        )
                        raise
        except Exception as exc:
            return _AIOutcome(None, failures, exc, _elapsed_ms(start))
        return _AIOutcome(assessment, failures, None, _elapsed_ms(start))

    def _recover(
        self,
        request_id: str,
        summary: StaticAnalysisSummary,
        outcome: _AIOutcome,
        fallback: FallbackBuilder,
    ) -> AIAssessment:
        """Substitute the fallback assessment, or re-raise the AI error."""
        error = outcome.error or AIAssessmentError(
            "AI assessment produced no result"
        )
        if self._audit is not None:
            self._audit.log_error(
                request_id, StageName.AI_ANALYSIS, str(error)
            )
        if not self._config.fallback_to_static:
            self._record_stage(
                request_id,
                StageName.AI_ANALYSIS,
                StageOutcome.FAILED,
                outcome.duration_ms,
                str(error),
            )
            logger.error(
                "event=ai_analysis_failed request_id=%s attempts=%d",
                request_id,
                outcome.failures,
            )
            raise error

        logger.warning(
            "event=ai_fallback_used request_id=%s attempts=%d kind=%s",
            request_id,
            outcome.failures,
            summary.kind,
        )
        self._record_stage(
            request_id,
            StageName.AI_ANALYSIS,
            StageOutcome.FALLBACK,
            outcome.duration_ms,
            str(error),
        )
        return fallback(summary)

    async def _complete(
        self,
        request_id: str,
        t0: float,
        summary: StaticAnalysisSummary,
        static_ms: float,
        call: AssessmentCall,
        fallback: FallbackBuilder,
    ) -> AlignedAssessmentResult:
        cfg = self._config
        outcome = await self._ai_stage(request_id, call)
        fallback_used = outcome.assessment is None
        if outcome.assessment is not None:
            ai = outcome.assessment
            self._record_stage(
                request_id,
                StageName.AI_ANALYSIS,
                StageOutcome.COMPLETED,
                outcome.duration_ms,
            )
        else:
            ai = self._recover(request_id, summary, outcome, fallback)

        start = time.monotonic()
        unified = self._metrics.create_unified_assessment(
            summary, ai, summary.file_size_analysis
        )
        self._record_stage(
            request_id,
            StageName.MERGE,
            StageOutcome.COMPLETED,
            _elapsed_ms(start),
        )

        validation: ValidationResult | None = None
        summary_block = ValidationSummary()
        if cfg.enable_validation:
            start = time.monotonic()
            validation = self._validator.validate_assessment(
                unified, summary.file_size_analysis
            )
            summary_block = ValidationSummary.from_result(validation)
            self._record_stage(
                request_id,
                StageName.VALIDATE,
                StageOutcome.COMPLETED,
                _elapsed_ms(start),
            )
        else:
            self._record_stage(
                request_id, StageName.VALIDATE, StageOutcome.SKIPPED, 0.0
            )

        metadata = AssessmentMetadata(
            request_id=request_id,
            static_analysis_time_ms=static_ms,
            ai_analysis_time_ms=outcome.duration_ms,
            total_analysis_time_ms=_elapsed_ms(t0),
            retry_count=outcome.failures,
            fallback_used=fallback_used,
        )
        result = AlignedAssessmentResult(
            overall_score=unified.overall_score,
            categories=unified.categories,
            assessment_status=unified.assessment_status,
            insights=unified.insights,
            validation=summary_block,
            assessment_metadata=metadata,
        )

        if validation is not None and not validation.is_valid:
            logger.warning(
                "event=alignment_failed request_id=%s alignment=%.1f "
                "issues=%d fallback=%s",
                request_id,
                validation.alignment_score,
                len(validation.issues),
                fallback_used,
            )
            if cfg.require_alignment and not fallback_used:
                raise AlignmentError(result, validation)

        logger.info(
            "event=assessment_complete request_id=%s kind=%s overall=%s "
            "alignment=%.1f retries=%d fallback=%s duration_ms=%.0f",
            request_id,
            summary.kind,
            result.overall_score.value,
            summary_block.alignment_score,
            metadata.retry_count,
            fallback_used,
            metadata.total_analysis_time_ms,
        )
        if self._audit is not None:
            self._audit.log_assessment(
                request_id,
                summary.kind,
                summary.target_url,
                result.overall_score.value,
                summary_block.alignment_score,
                metadata.retry_count,
                fallback_used,
                metadata.total_analysis_time_ms,
            )
        return result
