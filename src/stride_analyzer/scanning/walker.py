"""Tree walker: recursive directory traversal with a bounded worker pool.

Directories are listed on the calling thread; every regular file becomes
one accumulator task on a ThreadPoolExecutor. Tasks only return immutable
FileRecords. Once every task has joined, the directory plan is folded
bottom-up into a single WalkResult on the calling thread, so no worker
ever touches shared aggregate state.

Depth: an entry directly under the root has depth 1, its children depth 2,
and so on. The walk reports the deepest entry seen.
"""

from __future__ import annotations

import os
import threading
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from ..config import ScanConfig
from ..exceptions import FileAccessError, ScanCancelledError
from ..file_ops import Deadline
from ..logging_config import get_logger
from .accumulator import FileAccumulator
from .models import FileRecord

logger = get_logger(__name__)

# Default worker count: use CPU count, capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


class CancellationToken:
    """Cooperative cancellation flag, checked between files."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class WalkResult:
    """Immutable partial result of walking part of the tree."""

    records: tuple[FileRecord, ...] = ()
    files: int = 0
    lines: int = 0
    complexity: int = 0
    max_depth: int = 0

    @classmethod
    def of_file(cls, record: FileRecord, depth: int) -> WalkResult:
        return cls(
            records=(record,),
            files=1,
            lines=record.lines,
            complexity=record.cyclomatic_complexity,
            max_depth=depth,
        )

    @classmethod
    def from_records(cls, records: Iterable[FileRecord], max_depth: int) -> WalkResult:
        records = tuple(records)
        return cls(
            records=records,
            files=len(records),
            lines=sum(r.lines for r in records),
            complexity=sum(r.cyclomatic_complexity for r in records),
            max_depth=max_depth,
        )

    def merge(self, other: WalkResult) -> WalkResult:
        return WalkResult(
            records=self.records + other.records,
            files=self.files + other.files,
            lines=self.lines + other.lines,
            complexity=self.complexity + other.complexity,
            max_depth=max(self.max_depth, other.max_depth),
        )


# An entry is either a pending file task or a nested directory plan.
_Entry = Union["Future[Optional[FileRecord]]", "_DirPlan"]


@dataclass
class _DirPlan:
    depth: int
    entries: list[tuple[int, _Entry]] = field(default_factory=list)


class TreeWalker:
    """Walks a directory tree and measures every regular file.

    Args:
        config: Scan configuration (workers, timeouts, excluded directories)
        accumulator: Per-file measurer (built from config if omitted)
        cancel_token: Checked between files; cancel it to stop the scan
    """

    def __init__(
        self,
        config: ScanConfig,
        accumulator: Optional[FileAccumulator] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        self.config = config
        self.accumulator = accumulator or FileAccumulator(config)
        self.cancel_token = cancel_token or CancellationToken()
        self._max_workers = config.workers or _DEFAULT_WORKERS

    def walk(self, root: Path) -> WalkResult:
        """Walk ``root`` and fold every file into one WalkResult.

        The caller's token is only read. A timeout stops this walk through
        its own event, so the walker and the token stay reusable.

        Raises:
            ScanCancelledError: If the token is cancelled or the scan
                deadline passes before the walk is folded
        """
        deadline = Deadline(self.config.scan_timeout_seconds)
        stop = threading.Event()
        futures: list[Future] = []

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            try:
                plan = self._plan(Path(root), 0, executor, futures, deadline, stop)
            except ScanCancelledError:
                self._abandon(stop, futures)
                raise

            not_done: set[Future] = set()
            if futures:
                _, not_done = wait(
                    futures, timeout=deadline.remaining(), return_when=FIRST_EXCEPTION
                )

            failed = next(
                (f for f in futures if f.done() and not f.cancelled() and f.exception()),
                None,
            )
            if failed is not None:
                self._abandon(stop, not_done)
                raise failed.exception()

            if not_done:
                self._abandon(stop, not_done)
                logger.warning(
                    "Scan of %s exceeded %ss; abandoning %d pending files",
                    root,
                    self.config.scan_timeout_seconds,
                    len(not_done),
                )
                raise self._timeout_error()

        if self.cancel_token.cancelled:
            raise ScanCancelledError("cancelled by caller")

        return self._fold(plan, deadline)

    def _abandon(self, stop: threading.Event, pending: Iterable[Future]) -> None:
        # Running tasks finish their current file; queued ones never start.
        stop.set()
        for future in pending:
            future.cancel()

    def _timeout_error(self) -> ScanCancelledError:
        return ScanCancelledError(f"scan exceeded {self.config.scan_timeout_seconds}s")

    # ── Planning ───────────────────────────────────────────────

    def _plan(
        self,
        directory: Path,
        depth: int,
        executor: ThreadPoolExecutor,
        futures: list[Future],
        deadline: Deadline,
        stop: threading.Event,
    ) -> _DirPlan:
        plan = _DirPlan(depth=depth)
        if self.cancel_token.cancelled:
            return plan
        if deadline.expired:
            raise self._timeout_error()

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug("Cannot list %s: %s", directory, e)
            return plan

        child_depth = depth + 1
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.debug("Cannot stat %s: %s", entry.path, e)
                continue

            if is_dir:
                if entry.name in self.config.exclude_dirs:
                    continue
                child = self._plan(
                    Path(entry.path), child_depth, executor, futures, deadline, stop
                )
                plan.entries.append((child_depth, child))
            elif is_file:
                future = executor.submit(self._measure, Path(entry.path), stop)
                futures.append(future)
                plan.entries.append((child_depth, future))

        return plan

    def _measure(self, filepath: Path, stop: threading.Event) -> Optional[FileRecord]:
        if stop.is_set() or self.cancel_token.cancelled:
            return None
        try:
            return self.accumulator.accumulate(filepath)
        except FileAccessError as e:
            logger.debug("Skipping %s: %s", filepath, e.reason)
            return None

    # ── Reduction ──────────────────────────────────────────────

    def _fold(self, plan: _DirPlan, deadline: Deadline) -> WalkResult:
        """Collect the plan's records in traversal order into one WalkResult.

        Records are appended to a single list, so folding is linear in the
        number of files. The deadline is checked once per directory.
        """
        records: list[FileRecord] = []
        max_depth = self._collect(plan, records, deadline)
        return WalkResult.from_records(records, max_depth)

    def _collect(self, plan: _DirPlan, records: list[FileRecord], deadline: Deadline) -> int:
        if deadline.expired:
            raise self._timeout_error()
        max_depth = plan.depth
        for depth, entry in plan.entries:
            if isinstance(entry, _DirPlan):
                max_depth = max(max_depth, self._collect(entry, records, deadline))
                continue
            max_depth = max(max_depth, depth)
            record = entry.result()
            if record is not None:
                records.append(record)
        return max_depth
