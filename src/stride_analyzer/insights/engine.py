"""Suggestion/severity engine.

Turns a RepoMetrics aggregate into an ordered list of refactor
suggestions. Each rule is independent and appends in a fixed order, so
the output order is the rule order (and, within a rule, the aggregate's
traversal order). Only the per-file severity pass scores anything.

Severity for a file:
    severity = total_cyclomatic * 0.4 + halstead_volume * 0.3 + nesting * 0.3

The cyclomatic term is the repository total, so in large repositories
every file's severity is dominated by it.
"""

from __future__ import annotations

from collections.abc import Callable

from ..logging_config import get_logger
from ..metrics.models import RepoMetrics
from .models import Category, Suggestion

logger = get_logger(__name__)

SEVERITY_COMPLEXITY_WEIGHT = 0.4
SEVERITY_HALSTEAD_WEIGHT = 0.3
SEVERITY_NESTING_WEIGHT = 0.3
HIGH_PRIORITY_SEVERITY = 1000.0

DOC_GAP_PERCENT = 50.0
COHESION_FUNCTIONS_PER_CLASS = 10.0
DEEP_NESTING = 5
DEEP_DIRECTORY = 10
MANY_FILES = 500
MANY_LINES = 20000
HIGH_HALSTEAD_VOLUME = 5000.0


def compute_severity(total_complexity: int, halstead_volume: float, nesting: int) -> float:
    return (
        total_complexity * SEVERITY_COMPLEXITY_WEIGHT
        + halstead_volume * SEVERITY_HALSTEAD_WEIGHT
        + nesting * SEVERITY_NESTING_WEIGHT
    )


class SuggestionEngine:
    """Derives ordered suggestions from a finished aggregate."""

    def __init__(self) -> None:
        self._rules: list[Callable[[RepoMetrics], list[Suggestion]]] = [
            self._severity,
            self._large_files,
            self._doc_gaps,
            self._cohesion,
            self._nesting,
            self._tech_debt,
            self._structure,
            self._repo_size,
            self._dominant_type,
            self._halstead,
            self._cleanup,
        ]

    def generate(self, metrics: RepoMetrics) -> list[Suggestion]:
        """Run every rule in order.

        An error aggregate short-circuits to a single ERROR suggestion.
        """
        if metrics.error is not None:
            return [Suggestion(Category.ERROR, f"Cannot optimize: {metrics.error}")]

        suggestions: list[Suggestion] = []
        for rule in self._rules:
            suggestions.extend(rule(metrics))
        logger.debug("Generated %d suggestions", len(suggestions))
        return suggestions

    def severity_scores(self, metrics: RepoMetrics) -> dict[str, float]:
        """Severity for every file with a recorded nesting depth."""
        return {
            path: compute_severity(
                metrics.cyclomatic_complexity,
                metrics.halstead_volume_per_file.get(path, 0.0),
                nest,
            )
            for path, nest in metrics.nesting_depth_per_file.items()
        }

    # ── Rules ──────────────────────────────────────────────────

    def _severity(self, metrics: RepoMetrics) -> list[Suggestion]:
        return [
            Suggestion(Category.HIGH_PRIORITY, f"Refactor file: {path} (Severity={severity:.1f})")
            for path, severity in self.severity_scores(metrics).items()
            if severity > HIGH_PRIORITY_SEVERITY
        ]

    def _large_files(self, metrics: RepoMetrics) -> list[Suggestion]:
        return [Suggestion(Category.LARGE_FILE, f"Review: {f}") for f in metrics.largest_files]

    def _doc_gaps(self, metrics: RepoMetrics) -> list[Suggestion]:
        out = []
        for ext in metrics.file_types:
            lines = metrics.lines_per_type.get(ext, 0)
            comments = metrics.comment_lines_per_type.get(ext, 0)
            ratio = comments / lines * 100 if lines > 0 else 0.0
            if ratio < DOC_GAP_PERCENT:
                out.append(
                    Suggestion(
                        Category.DOC_GAP,
                        f"Low documentation in .{ext} files ({ratio:.1f}% comments)",
                    )
                )
        return out

    def _cohesion(self, metrics: RepoMetrics) -> list[Suggestion]:
        out = []
        for ext, functions in metrics.functions_per_type.items():
            classes = max(metrics.classes_per_type.get(ext, 0), 1)
            per_class = functions / classes
            if per_class > COHESION_FUNCTIONS_PER_CLASS:
                out.append(
                    Suggestion(
                        Category.COHESION,
                        f"High functions per class in .{ext} ({per_class:.1f})",
                    )
                )
        return out

    def _nesting(self, metrics: RepoMetrics) -> list[Suggestion]:
        return [
            Suggestion(Category.NESTING, f"Deep nesting in file {path} ({depth})")
            for path, depth in metrics.nesting_depth_per_file.items()
            if depth > DEEP_NESTING
        ]

    def _tech_debt(self, metrics: RepoMetrics) -> list[Suggestion]:
        return [Suggestion(Category.TECH_DEBT, flag) for flag in metrics.optimization_flags]

    def _structure(self, metrics: RepoMetrics) -> list[Suggestion]:
        if metrics.max_depth > DEEP_DIRECTORY:
            return [
                Suggestion(
                    Category.STRUCTURE,
                    f"Repository directory depth is {metrics.max_depth}; "
                    "consider flattening modules",
                )
            ]
        return []

    def _repo_size(self, metrics: RepoMetrics) -> list[Suggestion]:
        out = []
        if metrics.total_files > MANY_FILES:
            out.append(
                Suggestion(
                    Category.MODULARIZE,
                    f"High file count ({metrics.total_files}); "
                    "consider splitting into submodules",
                )
            )
        if metrics.total_lines > MANY_LINES:
            out.append(
                Suggestion(
                    Category.REFACTOR,
                    f"Large codebase ({metrics.total_lines} lines); "
                    "review large classes/functions",
                )
            )
        return out

    def _dominant_type(self, metrics: RepoMetrics) -> list[Suggestion]:
        dominant = "unknown"
        if metrics.file_types:
            # max() keeps the first of equal counts
            dominant = max(metrics.file_types.items(), key=lambda item: item[1])[0]
        return [Suggestion(Category.INFO, f"Dominant file type: {dominant}")]

    def _halstead(self, metrics: RepoMetrics) -> list[Suggestion]:
        return [
            Suggestion(Category.HALSTEAD, f"High complexity in file {path} (Volume={volume:.0f})")
            for path, volume in metrics.halstead_volume_per_file.items()
            if volume > HIGH_HALSTEAD_VOLUME
        ]

    def _cleanup(self, metrics: RepoMetrics) -> list[Suggestion]:
        empty = [ext for ext, lines in metrics.lines_per_type.items() if lines == 0]
        if not empty:
            return []
        return [
            Suggestion(
                Category.CLEANUP,
                "Some file types have zero lines: [" + ", ".join(empty) + "]",
            )
        ]


def generate_suggestions(metrics: RepoMetrics) -> list[Suggestion]:
    """Convenience wrapper around SuggestionEngine.generate()."""
    return SuggestionEngine().generate(metrics)
