"""Churn source backed by ``git log --name-only``."""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger(__name__)


class GitLogChurnSource:
    """List changed paths via a git subprocess.

    Paths are reported relative to ``repo_path`` (``--relative``), so a scan
    root inside a larger repository only sees its own subtree.
    """

    # Maximum git log output size (50MB) to prevent OOM on huge repos
    _MAX_OUTPUT_BYTES = 50 * 1024 * 1024

    def __init__(self, repo_path: str, timeout_seconds: float = 30.0):
        self.repo_path = str(Path(repo_path).resolve())
        self.timeout_seconds = timeout_seconds

    def changed_paths(self) -> list[str]:
        """Return one path per (commit, file), or [] if not a git repo."""
        if not self._is_git_repo():
            logger.info("Not a git repository, churn unavailable")
            return []

        raw = self._run_git_log()
        if raw is None:
            return []
        return [line.strip() for line in raw.splitlines() if line.strip()]

    def _is_git_repo(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    def _run_git_log(self) -> str | None:
        cmd = [
            "git",
            "-C",
            self.repo_path,
            "log",
            "--pretty=format:",
            "--name-only",
            "--relative",
        ]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout_seconds,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.warning("git log error: %s", e)
            return None

        if result.returncode != 0:
            logger.warning("git log failed: %s", result.stderr.strip())
            return None

        if len(result.stdout) > self._MAX_OUTPUT_BYTES:
            logger.warning(
                "git log output exceeded %dMB limit, truncating",
                self._MAX_OUTPUT_BYTES // (1024 * 1024),
            )
            return result.stdout[: self._MAX_OUTPUT_BYTES].rsplit("\n", 1)[0]
        return result.stdout
