"""Shared CLI helpers."""

import json
from typing import Any, Optional

from rich.console import Console

from ..exceptions import StrideError
from ..temporal import ChurnSource, EmptyChurnSource

console = Console()


def resolve_overrides(
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
    window: Optional[int] = None,
    threshold: Optional[int] = None,
    redact: bool = False,
) -> dict[str, Any]:
    """Map CLI options onto ScanConfig field overrides."""
    overrides: dict[str, Any] = {}
    if workers is not None:
        overrides["workers"] = workers
    if timeout is not None:
        overrides["scan_timeout_seconds"] = timeout
    if window is not None:
        overrides["dup_window_tokens"] = window
    if threshold is not None:
        overrides["large_file_threshold"] = threshold
    if redact:
        overrides["redact_secrets"] = True
    return overrides


def resolve_churn_source(no_git: bool) -> Optional[ChurnSource]:
    # None lets the pipeline fall back to git log in the root
    return EmptyChurnSource() if no_git else None


def report_error(error: StrideError, json_output: bool) -> None:
    """Print a rejected-invocation error in the requested output format."""
    if json_output:
        print(json.dumps(error.to_dict(), indent=2))
    else:
        console.print(f"[red]Error:[/red] {error.message}")
        if error.details.get("reason"):
            console.print(f"  {error.details['reason']}", markup=False)
