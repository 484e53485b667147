"""
Stride Analyzer - repository health metrics and refactor suggestions.

Scans a checked-out source tree with lexical heuristics (no parsing),
aggregates size, complexity, duplication, coupling and secret-pattern
metrics, and derives ordered refactor suggestions from them.
"""

__version__ = "0.1.0"

from .api import analyze, analyze_and_optimize, optimize, scan
from .config import ScanConfig, load_config
from .insights import Category, Suggestion, SuggestionEngine
from .metrics import RepoMetrics
from .scanning import CancellationToken, FileRecord

__all__ = [
    "analyze",
    "analyze_and_optimize",
    "optimize",
    "scan",
    "ScanConfig",
    "load_config",
    "Category",
    "Suggestion",
    "SuggestionEngine",
    "RepoMetrics",
    "CancellationToken",
    "FileRecord",
]
