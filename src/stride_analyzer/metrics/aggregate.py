"""Fold per-file records into the repository aggregate."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import Optional

from ..config import ScanConfig
from ..math import maintainability_index, mean
from ..scanning.duplicates import find_duplicate_blocks
from ..scanning.walker import WalkResult
from .models import CoupledFile, LargeFile, RepoMetrics

LARGEST_FILES_LIMIT = 5
COUPLING_HOTSPOTS_LIMIT = 10


class AggregateBuilder:
    """Builds RepoMetrics from a finished walk.

    Usage:
        builder = AggregateBuilder(config)
        metrics = builder.build(walk_result, churn={"src/a.py": 3})
    """

    def __init__(self, config: ScanConfig):
        self.config = config

    def build(self, walk: WalkResult, churn: Optional[Mapping[str, int]] = None) -> RepoMetrics:
        file_types: dict[str, int] = defaultdict(int)
        lines_per_type: dict[str, int] = defaultdict(int)
        comments_per_type: dict[str, int] = defaultdict(int)
        functions_per_type: dict[str, int] = defaultdict(int)
        classes_per_type: dict[str, int] = defaultdict(int)

        nesting: dict[str, int] = {}
        halstead: dict[str, float] = {}
        density: dict[str, float] = {}
        todos: dict[str, int] = {}
        cognitive: dict[str, int] = {}
        imports: dict[str, int] = {}
        window_hashes: dict[str, tuple[str, ...]] = {}
        secrets = []

        for record in walk.records:
            ext = record.extension
            file_types[ext] += 1
            lines_per_type[ext] += record.lines
            comments_per_type[ext] += record.comment_lines
            functions_per_type[ext] += record.functions
            classes_per_type[ext] += record.classes

            nesting[record.path] = record.max_nesting
            halstead[record.path] = record.halstead_volume
            density[record.path] = record.comment_density
            todos[record.path] = record.todo_count
            cognitive[record.path] = record.cognitive_complexity
            imports[record.path] = record.imports
            window_hashes[record.path] = record.window_hashes
            secrets.extend(record.secrets)

        avg_lines = {
            ext: lines_per_type[ext] / count if count else 0.0 for ext, count in file_types.items()
        }

        largest = self._largest_files(walk)
        flags = tuple(
            f"File {f.path} exceeds {self.config.large_file_threshold} lines"
            for f in largest
            if f.lines > self.config.large_file_threshold
        )

        avg_halstead = mean(halstead.values())
        total_comments = sum(comments_per_type.values())

        return RepoMetrics(
            total_files=walk.files,
            total_lines=walk.lines,
            max_depth=walk.max_depth,
            cyclomatic_complexity=walk.complexity,
            file_types=dict(file_types),
            lines_per_type=dict(lines_per_type),
            comment_lines_per_type=dict(comments_per_type),
            avg_lines_per_type=avg_lines,
            functions_per_type=dict(functions_per_type),
            classes_per_type=dict(classes_per_type),
            nesting_depth_per_file=nesting,
            halstead_volume_per_file=halstead,
            comment_density_per_file=density,
            todo_count_per_file=todos,
            cognitive_complexity_per_file=cognitive,
            import_count_per_file=imports,
            largest_files=largest,
            optimization_flags=flags,
            duplicate_blocks=tuple(find_duplicate_blocks(window_hashes)),
            secrets=tuple(secrets),
            top_coupled_files=self._coupling_hotspots(imports),
            maintainability_index=maintainability_index(
                walk.lines, walk.complexity, avg_halstead
            ),
            avg_halstead_volume=avg_halstead,
            overall_comment_density=total_comments / walk.lines if walk.lines else 0.0,
            churn=dict(churn or {}),
            thresholds=self.config.thresholds(),
        )

    def _largest_files(self, walk: WalkResult) -> tuple[LargeFile, ...]:
        # Stable sort: ties keep traversal order
        ranked = sorted(walk.records, key=lambda r: r.lines, reverse=True)
        return tuple(LargeFile(r.path, r.lines) for r in ranked[:LARGEST_FILES_LIMIT])

    def _coupling_hotspots(self, imports: Mapping[str, int]) -> tuple[CoupledFile, ...]:
        ranked = sorted(imports.items(), key=lambda item: item[1], reverse=True)
        return tuple(CoupledFile(path, count) for path, count in ranked[:COUPLING_HOTSPOTS_LIMIT])
