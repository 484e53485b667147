"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="stride-analyzer",
    help="Stride Analyzer - repository metrics and refactor suggestions",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Lexical repository metrics: size, complexity, duplication, coupling,
    secret patterns and churn, plus ordered refactor suggestions.
    """
    if version:
        console.print(
            f"[bold cyan]Stride Analyzer[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .optimize import optimize as _optimize  # noqa: F401, E402
