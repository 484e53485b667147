"""Public API for Stride Analyzer.

Example:
    >>> from stride_analyzer import analyze, analyze_and_optimize
    >>>
    >>> metrics = analyze("/path/to/repo")
    >>> metrics.total_files
    42
    >>>
    >>> report = analyze_and_optimize("/path/to/repo")
    >>> report["optimizerSuggestions"][0]
    '[LARGE FILE] Review: /path/to/repo/src/Big.java (812 lines)'

``analyze`` never raises for an invalid root or a cancelled scan: the
returned aggregate carries the error instead of any metrics.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from .config import ScanConfig, load_config
from .core import ScanPipeline, validate_root
from .exceptions import InvalidPathError, ScanCancelledError
from .insights import Suggestion, SuggestionEngine
from .logging_config import get_logger
from .metrics import RepoMetrics
from .scanning import CancellationToken
from .scanning.secrets import SuppressHook
from .temporal import ChurnSource

logger = get_logger(__name__)


def scan(
    path: Union[str, Path],
    config: Optional[ScanConfig] = None,
    churn_source: Optional[ChurnSource] = None,
    cancel_token: Optional[CancellationToken] = None,
    suppress: Optional[SuppressHook] = None,
    **overrides: Any,
) -> RepoMetrics:
    """Scan a repository root, raising on an invalid root or cancellation.

    Args:
        path: Repository root directory
        config: Explicit configuration (skips properties/env resolution)
        churn_source: History source (defaults to ``git log`` in the root)
        cancel_token: Cancel to stop the scan between files
        suppress: Secret suppression hook
        **overrides: ScanConfig field overrides when ``config`` is omitted

    Raises:
        InvalidPathError: If the root is missing or not a directory
        ScanCancelledError: If the scan is cancelled or times out
        InvalidConfigError: If an override is unknown or invalid
    """
    if config is None:
        validate_root(path)
        config = load_config(path, **overrides)
    pipeline = ScanPipeline(
        config=config,
        churn_source=churn_source,
        cancel_token=cancel_token,
        suppress=suppress,
    )
    return pipeline.run(path)


def analyze(path: Union[str, Path], **kwargs: Any) -> RepoMetrics:
    """Scan a repository root; failures become an error-only aggregate."""
    try:
        return scan(path, **kwargs)
    except InvalidPathError as e:
        logger.error("%s", e)
        return RepoMetrics.failed("Repository path does not exist or is not a directory.")
    except ScanCancelledError as e:
        logger.warning("%s", e)
        return RepoMetrics.failed(e.message)


def optimize(path: Union[str, Path], **kwargs: Any) -> list[Suggestion]:
    """Scan and return only the ordered suggestions."""
    return SuggestionEngine().generate(analyze(path, **kwargs))


def analyze_and_optimize(path: Union[str, Path], **kwargs: Any) -> dict[str, Any]:
    """Scan and return the metrics mapping with suggestions attached.

    The suggestion strings are stored under ``optimizerSuggestions``.
    """
    metrics = analyze(path, **kwargs)
    report = metrics.to_dict()
    report["optimizerSuggestions"] = [str(s) for s in SuggestionEngine().generate(metrics)]
    return report
