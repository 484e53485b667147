"""Repository-wide aggregate produced by one scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..scanning.models import DuplicateBlock, SecretMatch


@dataclass(frozen=True)
class LargeFile:
    path: str
    lines: int

    def __str__(self) -> str:
        return f"{self.path} ({self.lines} lines)"


@dataclass(frozen=True)
class CoupledFile:
    path: str
    imports: int

    def __str__(self) -> str:
        return f"{self.path} ({self.imports})"


@dataclass(frozen=True)
class RepoMetrics:
    """Aggregate of every FileRecord plus derived repository statistics.

    Either a complete aggregate (sub-maps possibly empty) or, when ``error``
    is set, an error marker carrying no metrics at all. Built once per scan
    and read-only afterwards.

    Invariants:
        total_files == sum(file_types.values())
        total_lines == sum(lines_per_type.values())
    """

    total_files: int = 0
    total_lines: int = 0
    max_depth: int = 0
    cyclomatic_complexity: int = 0

    # Per extension
    file_types: dict[str, int] = field(default_factory=dict)
    lines_per_type: dict[str, int] = field(default_factory=dict)
    comment_lines_per_type: dict[str, int] = field(default_factory=dict)
    avg_lines_per_type: dict[str, float] = field(default_factory=dict)
    functions_per_type: dict[str, int] = field(default_factory=dict)
    classes_per_type: dict[str, int] = field(default_factory=dict)

    # Per file (absolute path)
    nesting_depth_per_file: dict[str, int] = field(default_factory=dict)
    halstead_volume_per_file: dict[str, float] = field(default_factory=dict)
    comment_density_per_file: dict[str, float] = field(default_factory=dict)
    todo_count_per_file: dict[str, int] = field(default_factory=dict)
    cognitive_complexity_per_file: dict[str, int] = field(default_factory=dict)
    import_count_per_file: dict[str, int] = field(default_factory=dict)

    largest_files: tuple[LargeFile, ...] = ()
    optimization_flags: tuple[str, ...] = ()
    duplicate_blocks: tuple[DuplicateBlock, ...] = ()
    secrets: tuple[SecretMatch, ...] = ()
    top_coupled_files: tuple[CoupledFile, ...] = ()

    maintainability_index: float = 100.0
    avg_halstead_volume: float = 0.0
    overall_comment_density: float = 0.0

    # Repository-relative path -> number of historical changes
    churn: dict[str, int] = field(default_factory=dict)

    thresholds: dict[str, int] = field(default_factory=dict)

    error: Optional[str] = None

    @classmethod
    def failed(cls, message: str) -> RepoMetrics:
        """An error-only result: no metrics are reported alongside it."""
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Plain nested mapping, safe for JSON serialization."""
        if self.error is not None:
            return {"error": self.error}

        return {
            "totalFiles": self.total_files,
            "totalLines": self.total_lines,
            "fileTypes": dict(self.file_types),
            "linesPerType": dict(self.lines_per_type),
            "commentLinesPerType": dict(self.comment_lines_per_type),
            "avgLinesPerType": dict(self.avg_lines_per_type),
            "cyclomaticComplexity": self.cyclomatic_complexity,
            "maxDepth": self.max_depth,
            "top5LargestFiles": [
                {"path": f.path, "lines": f.lines} for f in self.largest_files
            ],
            "functionsPerType": dict(self.functions_per_type),
            "classesPerType": dict(self.classes_per_type),
            "nestingDepthPerFile": dict(self.nesting_depth_per_file),
            "halsteadVolumePerFile": dict(self.halstead_volume_per_file),
            "optimizationFlags": list(self.optimization_flags),
            "maintainabilityIndex": self.maintainability_index,
            "avgHalsteadVolume": self.avg_halstead_volume,
            "commentDensityPerFile": dict(self.comment_density_per_file),
            "overallCommentDensity": self.overall_comment_density,
            "todoCountPerFile": dict(self.todo_count_per_file),
            "duplicateBlocks": [
                {"hash": b.digest, "files": list(b.files)} for b in self.duplicate_blocks
            ],
            "secretsFound": [
                {"path": s.path, "lineNumber": s.line_number, "line": s.line}
                for s in self.secrets
            ],
            "cognitiveComplexityPerFile": dict(self.cognitive_complexity_per_file),
            "fileCoupling": dict(self.import_count_per_file),
            "topCoupledFiles": [
                {"path": c.path, "imports": c.imports} for c in self.top_coupled_files
            ],
            "gitChurnPerFile": dict(self.churn),
            "config": dict(self.thresholds),
        }
