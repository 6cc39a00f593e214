"""Process-wide logging for the CLI and the assessment audit trail.

Three entry points:

- ``setup_logging()`` installs the console handler on the root logger.
  It runs before litellm is imported because litellm reads LITELLM_LOG
  at import time.
- ``cleanup_third_party_handlers()`` runs once litellm is imported and
  drops the stream handlers it attaches, so its records reach the
  console through root only.
- ``audit_logger()`` wires the JSON-lines audit file used by
  :class:`agentready.logger.AssessmentLogger`.
"""

import logging
import os
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%dT%H:%M:%S"

AUDIT_LOGGER_NAME = "agentready.audit"
AUDIT_FILE_NAME = "assessment.log"

# litellm and the HTTP clients it drives log every request at INFO
_NOISY_LOGGERS = (
    "LiteLLM",
    "LiteLLM Router",
    "LiteLLM Proxy",
    "openai._base_client",
    "httpx",
    "httpcore",
)
_LITELLM_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy")

_done: set[str] = set()

logger = logging.getLogger(__name__)


def resolve_level(level: str | int) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""
    if isinstance(level, int):
        return level
    try:
        return logging.getLevelNamesMapping()[level.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


def setup_logging(level: str | None = None) -> None:
    """Configure console logging once per process.

    ``level`` defaults to the LOG_LEVEL environment variable, the same
    source :class:`agentready.config.Settings` reads ``log_level`` from.
    An unknown name falls back to INFO with a warning.
    """
    if "console" in _done:
        return
    _done.add("console")

    os.environ.setdefault("LITELLM_LOG", "WARNING")

    requested = level or os.environ.get("LOG_LEVEL") or "INFO"
    try:
        resolved = resolve_level(requested)
        invalid = None
    except ValueError:
        resolved = logging.INFO
        invalid = requested

    logging.basicConfig(
        level=resolved,
        format=CONSOLE_FORMAT,
        datefmt=CONSOLE_DATEFMT,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if invalid is not None:
        logger.warning(
            "event=invalid_log_level value=%s fallback=INFO", invalid
        )


def cleanup_third_party_handlers() -> None:
    """Drop litellm's own stream handlers; idempotent."""
    if "litellm" in _done:
        return
    _done.add("litellm")

    for name in _LITELLM_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True


def audit_logger(log_dir: Path, level: str | int = "INFO") -> logging.Logger:
    """Return the audit logger, writing JSON lines under ``log_dir``.

    Audit records do not propagate, so raw JSON never reaches the
    console. At most one file handler is attached per target file.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    audit = logging.getLogger(AUDIT_LOGGER_NAME)
    audit.setLevel(resolve_level(level))
    audit.propagate = False

    target = log_dir / AUDIT_FILE_NAME
    resolved = str(target.resolve())
    if not any(
        isinstance(h, logging.FileHandler) and h.baseFilename == resolved
        for h in audit.handlers
    ):
        handler = logging.FileHandler(target, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        audit.addHandler(handler)
    return audit
