"""Optimize command: suggestions only."""

from pathlib import Path

import typer

from ..api import analyze as run_analysis
from ..exceptions import StrideError
from ..formatters import JsonFormatter, RichFormatter
from ..insights import SuggestionEngine
from ..logging_config import setup_logging
from . import app
from ._common import console, report_error, resolve_churn_source


@app.command()
def optimize(
    path: Path = typer.Argument(
        Path("."),
        help="Repository root to analyze (default: current directory)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the suggestions as a JSON list of strings",
    ),
    no_git: bool = typer.Option(
        False,
        "--no-git",
        help="Skip git history",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Print only the ordered refactor suggestions for a repository.
    """
    setup_logging(verbose=verbose)

    try:
        metrics = run_analysis(path, churn_source=resolve_churn_source(no_git))
    except StrideError as e:
        report_error(e, json_output)
        raise typer.Exit(1)

    found = SuggestionEngine().generate(metrics)

    if json_output:
        JsonFormatter(include_metrics=False).render(metrics, found)
    else:
        RichFormatter(console=console, show_metrics=False).render(metrics, found)

    if not metrics.ok:
        raise typer.Exit(1)
