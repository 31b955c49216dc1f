"""CLI entry point — ``checker <directory>``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from chaptercheck import __version__
from chaptercheck.analysis.pipeline import run_checks
from chaptercheck.analysis.quality.rule_config import (
    RuleSet,
    load_rule_file,
)
from chaptercheck.constants import (
    DEFAULT_MAX_JOBS,
    EXIT_CONFIG_ERROR,
    EXIT_FAIL,
    EXIT_OK,
    OutputFormat,
)
from chaptercheck.errors import ConfigurationError
from chaptercheck.export import (
    aggregate,
    check_completeness,
    render_report,
)
from chaptercheck.logging_config import setup_logging
from chaptercheck.scanning.scanner import discover_chapters

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"checker {__version__}")
        return

    if args.directory is None:
        parser.print_usage(sys.stderr)
        print(
            "Error: the directory argument is required",
            file=sys.stderr,
        )
        sys.exit(EXIT_CONFIG_ERROR)

    sys.exit(_run_check(args))


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="checker",
        description=(
            "Check Markdown book chapters against the "
            "authoring conventions."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory containing NN-*.md chapter files",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="YAML rule file (CLI flags override its values)",
    )
    parser.add_argument(
        "--min-diagrams",
        type=int,
        default=None,
        help="Diagram threshold (default: 5)",
    )
    parser.add_argument(
        "--min-retrieval",
        type=int,
        default=None,
        help="Retrieval-practice threshold (default: 15)",
    )
    parser.add_argument(
        "--min-mistakes",
        type=int,
        default=None,
        help="Mistake-pattern threshold (default: 6)",
    )
    parser.add_argument(
        "--min-collapsible",
        type=int,
        default=None,
        help="Collapsible-section threshold (default: 35)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat every warning as a failure",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--expected-chapters",
        type=int,
        default=None,
        help="Report missing chapter numbers in 1..N",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=DEFAULT_MAX_JOBS,
        help=f"Chapters checked in parallel (default: {DEFAULT_MAX_JOBS})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser


def _resolve_rules(args: argparse.Namespace) -> RuleSet:
    """Defaults, then rule file, then CLI flags."""
    rules = (
        load_rule_file(args.config) if args.config else RuleSet()
    )
    return rules.with_overrides(
        min_diagrams=args.min_diagrams,
        min_retrieval_practice=args.min_retrieval,
        min_mistake_patterns=args.min_mistakes,
        min_collapsible_sections=args.min_collapsible,
        strict=True if args.strict else None,
    )


def _run_check(args: argparse.Namespace) -> int:
    """Execute the check and return the process exit code."""
    setup_logging("DEBUG" if args.verbose else "WARNING")

    try:
        if args.jobs < 1:
            msg = f"--jobs must be at least 1, got {args.jobs}"
            raise ConfigurationError(msg)
        if args.expected_chapters is not None and args.expected_chapters < 1:
            msg = (
                "--expected-chapters must be at least 1, "
                f"got {args.expected_chapters}"
            )
            raise ConfigurationError(msg)
        rules = _resolve_rules(args)
        directory = Path(args.directory)
        chapters = discover_chapters(directory)
        if not chapters:
            msg = f"No chapter files (NN-*.md) found in {directory}"
            raise ConfigurationError(msg)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger.info(
        "event=check_start dir=%s chapters=%d strict=%s",
        directory,
        len(chapters),
        rules.strict,
    )

    results = asyncio.run(run_checks(chapters, rules, args.jobs))
    completeness = (
        check_completeness(chapters, args.expected_chapters)
        if args.expected_chapters
        else None
    )
    report = aggregate(results, completeness)

    sys.stdout.write(render_report(report, args.format))
    if args.format == OutputFormat.JSON:
        sys.stdout.write("\n")

    return EXIT_FAIL if report.has_failures else EXIT_OK


if __name__ == "__main__":
    main()
