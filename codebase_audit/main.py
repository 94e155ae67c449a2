#!/usr/bin/env python3
"""Command-line interface: analyze one Java file and print its findings."""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .exceptions import AnalysisTimeoutError, ParseError
from .models import AnalysisResult, CombinedResult, ComplexityResult, RepositoryInfo
from .parser_loader import JavaSource, parse_java
from .reporting import (
    attach_metadata,
    compose_combined_report,
    compose_complexity_report,
    compose_quality_report,
    compose_security_report,
    compose_smell_report,
    compose_style_report,
    generate_custom_id,
)
from .service import (
    analyze_all,
    analyze_complexity,
    analyze_quality,
    analyze_security,
    analyze_smells,
    analyze_style,
)

CATEGORIES = ("all", "style", "complexity", "security", "smells", "quality")

EXIT_OK = 0
EXIT_MISSING_FILE = 1
EXIT_PARSE_ERROR = 2
EXIT_TIMEOUT = 3

console = Console()

REPORT_COMPOSERS = {
    "all": compose_combined_report,
    "style": compose_style_report,
    "complexity": compose_complexity_report,
    "security": compose_security_report,
    "smells": compose_smell_report,
    "quality": compose_quality_report,
}


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def run_category(
    category: str, source: JavaSource, parallel: bool = False
) -> AnalysisResult | ComplexityResult | CombinedResult:
    if category == "style":
        return analyze_style(source)
    if category == "complexity":
        return analyze_complexity(source)
    if category == "security":
        return analyze_security(source, parallel=parallel)
    if category == "smells":
        return analyze_smells(source, parallel=parallel)
    if category == "quality":
        return analyze_quality(source, parallel=parallel)
    return analyze_all(source, parallel=parallel)


def display_result(name: str, result: AnalysisResult | ComplexityResult) -> None:
    if isinstance(result, ComplexityResult):
        console.print(
            Panel(
                f"Cyclomatic complexity: [bold]{result.cyclomatic_complexity}[/bold]",
                title="Complexity",
                style="cyan",
            )
        )
        return

    table = Table(title=f"{name.capitalize()} findings (Total: {result.count})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Finding", style="yellow")
    for index, item in enumerate(result.items, 1):
        table.add_row(str(index), item)
    if not result.items:
        table.add_row("-", "[green]No issues found[/green]")
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Static analysis of a single Java source file"
    )
    parser.add_argument("file", help="Path to the Java source file")
    parser.add_argument(
        "--category",
        default="all",
        choices=CATEGORIES,
        help="Analysis category to run (default: all)",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--report", action="store_true", help="Print the plain-text notification report"
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run security, smell and quality checks on the thread pool too",
    )
    parser.add_argument("--username", default="local", help="Repository owner for the report")
    parser.add_argument("--repo", default="local", help="Repository name for the report")
    parser.add_argument("--commit", default="", help="Commit id for the report")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    file_path = Path(args.file)
    if not file_path.is_file():
        console.print(f"[red]Error: File does not exist: {file_path}[/red]")
        return EXIT_MISSING_FILE

    source = file_path.read_text(encoding="utf-8")
    try:
        parsed = parse_java(source)
        result = run_category(args.category, parsed, parallel=args.parallel)
    except ParseError as e:
        console.print(f"[red]Parse error: {e}[/red]")
        return EXIT_PARSE_ERROR
    except AnalysisTimeoutError as e:
        console.print(f"[red]Analysis timed out after {e.timeout}s[/red]")
        return EXIT_TIMEOUT

    repository_info = RepositoryInfo(
        username=args.username, repo=args.repo, commit_id=args.commit, path=str(file_path)
    )
    custom_id = generate_custom_id(args.username, args.repo, str(file_path))
    attach_metadata(result, repository_info, custom_id)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif args.report:
        print(REPORT_COMPOSERS[args.category](result, custom_id))
    elif isinstance(result, CombinedResult):
        for name, category_result in result.categories().items():
            display_result(name, category_result)
    else:
        display_result(args.category, result)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
