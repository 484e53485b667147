"""Analyze command: full metrics report with suggestions."""

from pathlib import Path
from typing import Optional

import typer

from ..api import analyze as run_analysis
from ..exceptions import StrideError
from ..formatters import JsonFormatter, RichFormatter
from ..insights import SuggestionEngine
from ..logging_config import setup_logging
from . import app
from ._common import console, report_error, resolve_churn_source, resolve_overrides


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Repository root to analyze (default: current directory)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    suggestions: bool = typer.Option(
        True,
        "--suggestions/--no-suggestions",
        help="Include refactor suggestions in the report",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Whole-scan timeout in seconds",
    ),
    window: Optional[int] = typer.Option(
        None,
        "--window",
        help="Duplicate detection window in tokens",
        min=1,
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "--threshold",
        help="Line count above which a file is flagged as large",
        min=1,
    ),
    redact: bool = typer.Option(
        False,
        "--redact",
        help="Mask matched secret values in the report",
    ),
    no_git: bool = typer.Option(
        False,
        "--no-git",
        help="Skip git history (no churn section)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Scan a repository and report size, complexity and hygiene metrics.

    [bold cyan]Examples:[/bold cyan]

      stride-analyzer analyze .

      stride-analyzer analyze /path/to/repo --json

      stride-analyzer analyze . --no-suggestions --threshold 800
    """
    setup_logging(verbose=verbose)

    try:
        metrics = run_analysis(
            path,
            churn_source=resolve_churn_source(no_git),
            **resolve_overrides(workers, timeout, window, threshold, redact),
        )
    except StrideError as e:
        report_error(e, json_output)
        raise typer.Exit(1)

    found = SuggestionEngine().generate(metrics) if suggestions else []

    if json_output:
        JsonFormatter().render(metrics, found)
    else:
        RichFormatter(console=console).render(metrics, found)

    if not metrics.ok:
        raise typer.Exit(1)
