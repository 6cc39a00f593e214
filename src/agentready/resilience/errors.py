"""Error classification and the assessment exception hierarchy.

Classifies exceptions by category. The classification drives the
AI retry loop (permanent failures stop it early) and tags every
attempt-failure log line.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentready.analysis.metrics.schemas import (
        UnifiedAssessmentResult,
        ValidationResult,
    )


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors; retryable
    SERVER = "server"  # 500, 502, 503; retryable
    TIMEOUT = "timeout"  # deadline exceeded; retryable with backoff
    CLIENT = "client"  # 400, 401, 403; permanent, never retried
    CONTRACT = "contract"  # malformed assessor output; retried
    UNKNOWN = "unknown"  # unclassified; retried


class AgentReadyError(Exception):
    """Base class for errors raised by the assessment pipeline."""


class AIAssessmentError(AgentReadyError):
    """The generative assessor could not produce a usable result."""


class AlignmentError(AgentReadyError):
    """Strict alignment was required and validation failed.

    Carries the full result so callers can still inspect it.
    """

    def __init__(
        self,
        result: UnifiedAssessmentResult,
        validation: ValidationResult,
    ) -> None:
        super().__init__(
            f"Static and AI assessments are not aligned "
            f"(alignment score {validation.alignment_score:.1f}, "
            f"{len(validation.issues)} issue(s))"
        )
        self.result = result
        self.validation = validation


def classify_error(error: BaseException) -> ErrorClass:
    """Classify an error for retry decisions and reporting.

    Checks structured attributes first (status_code), then pydantic
    and JSON decoding failures, and falls back to string matching
    for untyped exceptions.
    """
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorClass.TIMEOUT

    # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
    if isinstance(error, ValueError):
        return ErrorClass.CONTRACT

    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg or "rate_limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("400", "401", "403", "404")):
        return ErrorClass.CLIENT

    return ErrorClass.UNKNOWN


_PERMANENT = frozenset({ErrorClass.CLIENT})


def is_permanent(error: BaseException) -> bool:
    """Return True if repeating the same request cannot succeed."""
    return classify_error(error) in _PERMANENT


def should_retry(error: BaseException) -> bool:
    """Retry predicate for the AI stage.

    Only permanent (CLIENT) failures stop the loop; malformed output
    and unclassified errors are attempted again.
    """
    return not is_permanent(error)
