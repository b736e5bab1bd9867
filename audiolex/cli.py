"""CLI commands for audiolex.

Provides subcommands that run the classification engine on a piece of text.

Commands:
    audiolex classify TEXT   - Classify the intent of TEXT
    audiolex query TEXT      - Analyze TEXT as a user query
    audiolex purpose TEXT    - Analyze the purpose of TEXT
    audiolex validate        - Replay the labelled corpus and report accuracy
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import EngineSettings
from .core.intent import (
    ExpertiseLevel,
    Intent,
    IntentResult,
    ModelManager,
    PurposeResult,
    QueryResult,
    ValidationReport,
    create_manager,
)

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Configure root logging to stderr.

    Uses WARNING level by default; DEBUG when debug is set. An existing
    root handler is left in place.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)


def _context(args: argparse.Namespace) -> dict[str, str]:
    expertise = getattr(args, "expertise", None)
    return {"expertise": expertise} if expertise else {}


def _wants_json(args: argparse.Namespace) -> bool:
    return args.json or args.settings.output_format == "json"


def _print_json(data: dict) -> None:
    console.print_json(json.dumps(data))


def render_intent(result: IntentResult) -> Table:
    """Build a table for an intent result."""
    table = Table(title="Intent")
    table.add_column("Intent", style="bold")
    table.add_column("Confidence", justify="right")
    table.add_column("Description")

    label = result.intent.value + (" [dim](fallback)[/dim]" if result.is_fallback else "")
    table.add_row(label, f"{result.confidence:.3f}", result.intent.description)
    for alt in result.alternatives:
        table.add_row(f"[dim]{alt.intent.value}[/dim]", f"{alt.confidence:.3f}", alt.intent.description)
    return table


def render_query(result: QueryResult) -> Table:
    """Build a table for a query result."""
    table = Table(title="Query Analysis")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Category", result.category.value)
    table.add_row(
        "Complexity",
        f"{result.complexity.level.value} ({result.complexity.score:.2f}, "
        f"{result.complexity.word_count} words, "
        f"{result.complexity.technical_terms_found} technical terms)",
    )
    table.add_row("Expertise", result.expertise.value)
    table.add_row(
        "Subdomain",
        f"{result.domain.subdomain.value} ({result.domain.confidence:.2f}, "
        f"relevance {result.domain.relevance:.2f})",
    )
    table.add_row(
        "Entities",
        ", ".join(f"{escape(e.text)} ({e.type.value})" for e in result.entities) or "-",
    )
    table.add_row("Keywords", ", ".join(result.keywords) or "-")
    return table


def render_purpose(result: PurposeResult) -> Table:
    """Build a table for a content purpose result."""
    table = Table(title="Content Purpose")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Purpose", result.purpose.value)
    table.add_row("Audience", result.audience.value)
    table.add_row("Actionability", result.actionability.value)
    table.add_row(
        "Urgency",
        f"{result.urgency.level:.2f} ({result.urgency.time_sensitivity.value})"
        + (f": {', '.join(result.urgency.critical_issues)}" if result.urgency.critical_issues else ""),
    )
    table.add_row("Sentiment", f"{result.sentiment.label.value} ({result.sentiment.score:+.3f})")
    table.add_row(
        "Quality",
        f"completeness {result.quality.completeness:.2f}, "
        f"organization {result.quality.organization:.2f}",
    )
    return table


def render_report(report: ValidationReport) -> Table:
    """Build a table for a validation report."""
    table = Table(title=f"Validation ({report.total_examples} examples)")
    table.add_column("Task", style="bold")
    table.add_column("Accuracy", justify="right")

    table.add_row("Intent", f"{report.intent_accuracy:.0%}")
    table.add_row("Category", f"{report.category_accuracy:.0%}")
    table.add_row("Expertise", f"{report.expertise_accuracy:.0%}")
    table.add_row("Subdomain", f"{report.subdomain_accuracy:.0%}")
    return table


def classify_text(args: argparse.Namespace) -> int:
    """Classify the intent of text.

    Args:
        args: Parsed arguments (text, allow, expertise)

    Returns:
        Exit code (0 for success)
    """
    manager: ModelManager = args.manager
    result = manager.classify(args.text, _context(args), args.allow)

    if _wants_json(args):
        _print_json(result.to_dict())
    else:
        console.print(render_intent(result))
    return 0


def analyze_query(args: argparse.Namespace) -> int:
    """Analyze text as a user query."""
    manager: ModelManager = args.manager
    result = manager.analyze_query(args.text, _context(args))

    if _wants_json(args):
        _print_json(result.to_dict())
    else:
        console.print(render_query(result))
    return 0


def analyze_purpose(args: argparse.Namespace) -> int:
    """Analyze the purpose of a piece of content."""
    manager: ModelManager = args.manager
    result = manager.analyze_purpose(args.text)

    if _wants_json(args):
        _print_json(result.to_dict())
    else:
        console.print(render_purpose(result))
    return 0


def validate_models(args: argparse.Namespace) -> int:
    """Replay the labelled corpus and print per-task accuracy."""
    manager: ModelManager = args.manager
    report = manager.validate()

    if _wants_json(args):
        _print_json(report.to_dict())
        return 0

    console.print(render_report(report))
    if report.misses:
        console.print()
        console.print("[yellow]Misses:[/yellow]")
        for miss in report.misses:
            console.print(
                f"  • {miss.task}: expected {miss.expected}, got {miss.predicted} "
                f"[dim]({escape(miss.text)})[/dim]"
            )
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="audiolex",
        description="audiolex - lexical intent and content classification for audio text",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--project",
        "-p",
        dest="project_path",
        default=".",
        help="Directory containing .audiolex/config.yaml (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command")

    expertise_choices = [level.value for level in ExpertiseLevel]

    # =========================================================================
    # classify command
    # =========================================================================
    classify_parser = subparsers.add_parser("classify", help="Classify intent")
    classify_parser.add_argument("text", help="Text to classify")
    classify_parser.add_argument(
        "--allow",
        "-a",
        action="extend",
        nargs="+",
        choices=[intent.value for intent in Intent],
        help="Restrict classification to these intents",
    )
    classify_parser.add_argument(
        "--expertise",
        choices=expertise_choices,
        help="Declared user expertise (passed as context, not read by intent scoring)",
    )
    classify_parser.set_defaults(func=classify_text)

    # =========================================================================
    # query command
    # =========================================================================
    query_parser = subparsers.add_parser("query", help="Analyze a user query")
    query_parser.add_argument("text", help="Query text")
    query_parser.add_argument(
        "--expertise",
        choices=expertise_choices,
        help="Declared user expertise (overrides estimation)",
    )
    query_parser.set_defaults(func=analyze_query)

    # =========================================================================
    # purpose command
    # =========================================================================
    purpose_parser = subparsers.add_parser("purpose", help="Analyze content purpose")
    purpose_parser.add_argument("text", help="Content text")
    purpose_parser.set_defaults(func=analyze_purpose)

    # =========================================================================
    # validate command
    # =========================================================================
    validate_parser = subparsers.add_parser("validate", help="Report accuracy on the labelled corpus")
    validate_parser.set_defaults(func=validate_models)

    return parser


def run_cli(args: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not hasattr(parsed, "func"):
        parser.print_help()
        return 0

    try:
        settings = EngineSettings.load(Path(parsed.project_path).resolve())
        setup_logging(settings.debug)
        parsed.settings = settings
        parsed.manager = create_manager(settings)
        return parsed.func(parsed)
    except KeyboardInterrupt:
        console.print("\n[dim]Cancelled.[/dim]")
        return 130
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1


def main() -> None:
    """Console script entry point."""
    sys.exit(run_cli())


__all__ = [
    "create_parser",
    "run_cli",
    "main",
    "classify_text",
    "analyze_query",
    "analyze_purpose",
    "validate_models",
]
