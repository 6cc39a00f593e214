"""CLI entry point: ``agentready assess`` and ``agentready score``."""

from __future__ import annotations

# Console logging must be configured before litellm is imported
from agentready.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import asyncio  # noqa: E402
import json  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402

from pydantic import ValidationError  # noqa: E402

from agentready import __version__  # noqa: E402
from agentready.config import Settings  # noqa: E402
from agentready.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
)

# litellm attaches its own handlers at import time
cleanup_third_party_handlers()


def main() -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.version:
        print(f"agentready {__version__}")
        return

    if args.command == "assess":
        _run_assess(args)
    elif args.command == "score":
        _run_score(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="agentready",
        description=(
            "Agent-readiness scoring: reconciles static analysis "
            "with an AI assessment."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    assess = sub.add_parser(
        "assess",
        help="Run the full aligned assessment (calls the LLM)",
    )
    assess.add_argument(
        "summary_path",
        type=str,
        help="Path to a static analysis summary (JSON)",
    )
    assess.add_argument(
        "--website",
        "-w",
        action="store_true",
        help="Input is a website analysis instead of a repository summary",
    )
    assess.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the result JSON here (default: stdout)",
    )

    score = sub.add_parser(
        "score",
        help="Merge and validate pre-computed results offline",
    )
    score.add_argument(
        "summary_path",
        type=str,
        help="Path to a static analysis summary (JSON)",
    )
    score.add_argument(
        "--ai",
        default=None,
        help="Path to an AI assessment (JSON); static-only when omitted",
    )
    score.add_argument(
        "--website",
        "-w",
        action="store_true",
        help="Input is a website analysis instead of a repository summary",
    )
    score.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the result JSON here (default: stdout)",
    )

    return parser


def _emit(payload: dict[str, Any], output: str | None) -> None:
    text = json.dumps(payload, indent=2, default=str)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"Output: {output}")
    else:
        print(text)


def _run_assess(args: argparse.Namespace) -> None:
    """Execute the assess command."""
    from agentready.analysis.llm.assessor import LiteLLMAssessor
    from agentready.analysis.static.loader import JsonFileStaticAnalyzer
    from agentready.logger import AssessmentLogger
    from agentready.resilience.errors import AgentReadyError
    from agentready.services.assessment_service import (
        AlignedAssessmentConfig,
        AlignedAssessmentEngine,
    )

    path = Path(args.summary_path)
    if not path.exists():
        print(f"Error: {path} does not exist", file=sys.stderr)
        sys.exit(1)

    try:
        settings = Settings()
        engine = AlignedAssessmentEngine(
            JsonFileStaticAnalyzer(),
            LiteLLMAssessor(settings),
            AlignedAssessmentConfig.from_settings(settings),
            audit_logger=AssessmentLogger(
                settings.log_dir, settings.log_level
            ),
        )
        run = (
            engine.assess_website if args.website
            else engine.assess_repository
        )
        result = asyncio.run(run(str(path)))
    except (
        AgentReadyError, ValidationError, TimeoutError, OSError
    ) as exc:
        print(f"Error: {type(exc).__name__}: {exc}", file=sys.stderr)
        sys.exit(1)

    _emit(result.model_dump(mode="json"), args.output)


def _run_score(args: argparse.Namespace) -> None:
    """Execute the score command (no network)."""
    from agentready.analysis.llm.schemas import AIAssessment
    from agentready.analysis.metrics.config import (
        MetricsConfig,
        ValidatorConfig,
    )
    from agentready.analysis.metrics.engine import UnifiedMetricsEngine
    from agentready.analysis.metrics.validator import MetricsValidator
    from agentready.analysis.static.schemas import (
        StaticAnalysisSummary,
        WebsiteAnalysis,
    )
    from agentready.analysis.static.website import website_to_static

    try:
        settings = Settings()
        raw = Path(args.summary_path).read_text(encoding="utf-8")
        summary = (
            website_to_static(WebsiteAnalysis.model_validate_json(raw))
            if args.website
            else StaticAnalysisSummary.model_validate_json(raw)
        )
        ai = (
            AIAssessment.model_validate_json(
                Path(args.ai).read_text(encoding="utf-8")
            )
            if args.ai
            else None
        )
    except (OSError, ValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    metrics = MetricsConfig(
        static_weight=settings.static_weight,
        ai_weight=settings.ai_weight,
        max_score_variance=settings.max_score_variance,
        min_confidence_threshold=settings.min_confidence_threshold,
    )
    result = UnifiedMetricsEngine(metrics).create_unified_assessment(
        summary, ai
    )
    validator = MetricsValidator(ValidatorConfig.from_metrics(metrics))
    validation = validator.validate_assessment(
        result, summary.file_size_analysis
    )
    report = validator.generate_alignment_report(result.categories)

    _emit(
        {
            "result": result.model_dump(mode="json"),
            "validation": validation.model_dump(mode="json"),
            "alignment_report": report.model_dump(mode="json"),
        },
        args.output,
    )


if __name__ == "__main__":
    main()
