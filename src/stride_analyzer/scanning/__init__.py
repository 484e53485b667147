"""Metrics collection: line classification, per-file records, tree walking."""

from .accumulator import FileAccumulator, get_file_extension
from .classifier import LINE_PREDICATES, apply_nesting, classify_line
from .duplicates import WindowHasher, find_duplicate_blocks
from .models import DuplicateBlock, FileRecord, LineSignals, SecretMatch
from .secrets import SecretScanner
from .walker import CancellationToken, TreeWalker, WalkResult

__all__ = [
    "FileAccumulator",
    "get_file_extension",
    "LINE_PREDICATES",
    "apply_nesting",
    "classify_line",
    "WindowHasher",
    "find_duplicate_blocks",
    "DuplicateBlock",
    "FileRecord",
    "LineSignals",
    "SecretMatch",
    "SecretScanner",
    "CancellationToken",
    "TreeWalker",
    "WalkResult",
]
