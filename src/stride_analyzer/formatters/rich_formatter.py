"""Rich terminal formatter for Stride Analyzer."""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..insights import Category, Suggestion
from ..metrics import RepoMetrics
from .base import BaseFormatter

_CATEGORY_STYLES = {
    Category.ERROR: "red bold",
    Category.HIGH_PRIORITY: "red bold",
    Category.LARGE_FILE: "yellow",
    Category.NESTING: "yellow",
    Category.HALSTEAD: "yellow",
    Category.TECH_DEBT: "magenta",
    Category.INFO: "dim",
}


def _mi_label(mi: float) -> str:
    if mi >= 65:
        return "[green]maintainable[/green]"
    elif mi >= 40:
        return "[yellow]moderate[/yellow]"
    else:
        return "[red]hard to maintain[/red]"


class RichFormatter(BaseFormatter):
    """Summary panel, per-extension table, hotspots and suggestion list."""

    def __init__(self, console: Optional[Console] = None, show_metrics: bool = True):
        self.console = console or Console()
        self.show_metrics = show_metrics

    def render(self, metrics: RepoMetrics, suggestions: List[Suggestion]) -> None:
        if metrics.error is not None:
            self.console.print(f"[red]Error:[/red] {metrics.error}")
            return
        if self.show_metrics:
            self._print_summary(metrics)
            self._print_types(metrics)
            self._print_findings(metrics)
        self._print_suggestions(suggestions)

    def format(self, metrics: RepoMetrics, suggestions: List[Suggestion]) -> str:
        with self.console.capture() as capture:
            self.render(metrics, suggestions)
        return capture.get()

    # -- private helpers --

    def _print_summary(self, metrics: RepoMetrics) -> None:
        summary_text = (
            f"Files [bold]{metrics.total_files}[/bold]  |  "
            f"Lines [bold]{metrics.total_lines}[/bold]  |  "
            f"Cyclomatic [bold]{metrics.cyclomatic_complexity}[/bold]  |  "
            f"Max depth [bold]{metrics.max_depth}[/bold]\n"
            f"Maintainability [blue]{metrics.maintainability_index:.2f}[/blue] "
            f"({_mi_label(metrics.maintainability_index)})  |  "
            f"Comment density [blue]{metrics.overall_comment_density:.1%}[/blue]"
        )
        self.console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        self.console.print()

    def _print_types(self, metrics: RepoMetrics) -> None:
        if not metrics.file_types:
            return
        table = Table(title="By Extension", expand=False)
        table.add_column("Ext", style="cyan")
        table.add_column("Files", justify="right")
        table.add_column("Lines", justify="right")
        table.add_column("Avg", justify="right")
        table.add_column("Comments", justify="right")
        table.add_column("Functions", justify="right")
        table.add_column("Classes", justify="right")

        ranked = sorted(metrics.file_types.items(), key=lambda item: item[1], reverse=True)
        for ext, count in ranked:
            table.add_row(
                ext,
                str(count),
                str(metrics.lines_per_type.get(ext, 0)),
                f"{metrics.avg_lines_per_type.get(ext, 0.0):.1f}",
                str(metrics.comment_lines_per_type.get(ext, 0)),
                str(metrics.functions_per_type.get(ext, 0)),
                str(metrics.classes_per_type.get(ext, 0)),
            )
        self.console.print(table)
        self.console.print()

    def _print_findings(self, metrics: RepoMetrics) -> None:
        if metrics.duplicate_blocks:
            self.console.print(
                f"[bold]Duplicate blocks:[/bold] [yellow]{len(metrics.duplicate_blocks)}[/yellow]"
            )
            for block in metrics.duplicate_blocks[:10]:
                self.console.print(f"  [yellow]-[/yellow] {block}", markup=False)
            self.console.print()

        if metrics.secrets:
            self.console.print(
                f"[bold]Potential secrets:[/bold] [red]{len(metrics.secrets)}[/red] "
                "[dim](heuristic, review manually)[/dim]"
            )
            for match in metrics.secrets[:10]:
                self.console.print(f"  [red]![/red] {match.path}:{match.line_number}")
            self.console.print()

        if metrics.top_coupled_files:
            self.console.print("[bold]Most imports:[/bold]")
            for coupled in metrics.top_coupled_files:
                self.console.print(f"  {coupled}", markup=False)
            self.console.print()

        if metrics.churn:
            ranked = sorted(metrics.churn.items(), key=lambda item: item[1], reverse=True)
            self.console.print("[bold]Most changed:[/bold]")
            for path, count in ranked[:10]:
                self.console.print(f"  {path} ({count})", markup=False)
            self.console.print()

    def _print_suggestions(self, suggestions: List[Suggestion]) -> None:
        if not suggestions:
            return
        self.console.print(f"[bold cyan]SUGGESTIONS[/bold cyan] -- {len(suggestions)}")
        for suggestion in suggestions:
            style = _CATEGORY_STYLES.get(suggestion.category, "green")
            if suggestion.category is Category.TECH_DEBT:
                label = "DEBT"
            else:
                label = suggestion.category.value
            self.console.print(f"  [{style}]{label:>13}[/{style}]  ", end="")
            self.console.print(suggestion.message, markup=False, highlight=False)
        self.console.print()
