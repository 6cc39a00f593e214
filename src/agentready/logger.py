"""Structured JSON audit log for assessment runs."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from agentready.constants import ERROR_TRUNCATION_CHARS
from agentready.logging_config import AUDIT_FILE_NAME, audit_logger

__all__ = ["AssessmentLogger"]


class AssessmentLogger:
    """JSON-lines logger with request_id correlation."""

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._logger = audit_logger(log_dir, level)

    @property
    def log_file(self) -> Path:
        return self._log_dir / AUDIT_FILE_NAME

    def log_assessment(
        self,
        request_id: str,
        kind: str,
        target: str,
        overall_score: float,
        alignment_score: float,
        retry_count: int,
        fallback_used: bool,
        duration_ms: float,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "assessment",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "kind": kind,
                "target": target,
                "overall_score": overall_score,
                "alignment_score": alignment_score,
                "retry_count": retry_count,
                "fallback_used": fallback_used,
                "duration_ms": duration_ms,
            })
        )

    def log_error(
        self,
        request_id: str,
        component: str,
        error: str,
    ) -> None:
        self._logger.error(
            json.dumps({
                "type": "error",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "component": component,
                "error": error[:ERROR_TRUNCATION_CHARS],
            })
        )

    def log_stage(
        self,
        request_id: str,
        stage_name: str,
        status: str,
        duration_ms: float,
        error: str | None = None,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "stage",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "stage": stage_name,
                "status": status,
                "duration_ms": duration_ms,
                "error": error,
            })
        )
