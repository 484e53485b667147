"""Per-path churn counts from a pluggable history source.

A churn source lists the repository-relative paths touched by every
historical revision, one entry per (revision, path), in any order. The
counts are simply occurrences per path.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from ..logging_config import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ChurnSource(Protocol):
    """Anything that can list historically changed paths."""

    def changed_paths(self) -> Iterable[str]:
        """Yield one repository-relative path per (revision, path) change."""
        ...


class StaticChurnSource:
    """Canned path list, e.g. captured ``git log --name-only`` output."""

    def __init__(self, paths: Iterable[str]):
        self._paths = list(paths)

    @classmethod
    def from_log_output(cls, raw: str) -> StaticChurnSource:
        return cls(line for line in raw.splitlines())

    def changed_paths(self) -> Iterable[str]:
        return list(self._paths)


class EmptyChurnSource:
    """History unavailable."""

    def changed_paths(self) -> Iterable[str]:
        return []


def compute_churn(source: ChurnSource) -> dict[str, int]:
    """Count changes per path.

    Blank entries are ignored. Any failure of the source yields an empty
    mapping; churn never fails a scan.
    """
    try:
        counts = Counter(p.strip() for p in source.changed_paths() if p and p.strip())
    except Exception as e:
        logger.info("Churn unavailable: %s", e)
        return {}
    return dict(sorted(counts.items()))
