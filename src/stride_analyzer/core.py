"""Scan pipeline: config → tree walk (+ churn) → aggregate.

The churn source runs on its own thread while the tree is walked and is
joined before aggregation. Only an invalid root or a cancelled/timed-out
walk escapes as an exception; every other failure is absorbed by the
component that hit it.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from .config import ScanConfig, load_config
from .exceptions import InvalidPathError
from .logging_config import get_logger
from .metrics import AggregateBuilder, RepoMetrics
from .scanning import CancellationToken, FileAccumulator, SecretScanner, TreeWalker
from .scanning.secrets import SuppressHook
from .temporal import ChurnSource, GitLogChurnSource, compute_churn

logger = get_logger(__name__)


def validate_root(root: Union[str, Path]) -> Path:
    """Return the root as a Path.

    Raises:
        InvalidPathError: If the root is missing or not a directory
    """
    path = Path(root)
    if not path.exists():
        raise InvalidPathError(path, "Repository path does not exist")
    if not path.is_dir():
        raise InvalidPathError(path, "Repository path is not a directory")
    return path


class ScanPipeline:
    """One configured scan of one repository root.

    Args:
        config: Scan configuration; resolved from the root if omitted
        churn_source: History source; ``git log`` in the root if omitted
        cancel_token: Cancel to stop the walk between files
        suppress: Extra secret suppression hook ``(path, line_no, text) -> bool``
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        churn_source: Optional[ChurnSource] = None,
        cancel_token: Optional[CancellationToken] = None,
        suppress: Optional[SuppressHook] = None,
    ):
        self.config = config
        self.churn_source = churn_source
        self.cancel_token = cancel_token or CancellationToken()
        self.suppress = suppress

    def run(self, root: Union[str, Path]) -> RepoMetrics:
        """Scan ``root`` and return the complete aggregate.

        Raises:
            InvalidPathError: If the root is missing or not a directory
            ScanCancelledError: If the walk is cancelled or times out
        """
        path = validate_root(root)
        config = self.config or load_config(path)

        scanner = SecretScanner(
            allowlist=config.secret_allowlist,
            suppress=self.suppress,
            redact=config.redact_secrets,
        )
        walker = TreeWalker(
            config,
            accumulator=FileAccumulator(config, scanner),
            cancel_token=self.cancel_token,
        )
        source = self.churn_source or GitLogChurnSource(str(path))

        logger.info("Scanning %s", path)
        with ThreadPoolExecutor(max_workers=1) as churn_executor:
            churn_future = churn_executor.submit(compute_churn, source)
            walk = walker.walk(path)
            churn = churn_future.result()

        metrics = AggregateBuilder(config).build(walk, churn)
        logger.info(
            "Scanned %d files (%d lines) in %s", metrics.total_files, metrics.total_lines, path
        )
        return metrics
