"""Configuration loading for Stride Analyzer.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in ScanConfig)
    2. Repository overrides (<root>/stride-analyzer.properties)
    3. Environment variables (STRIDE_* prefix)
    4. Explicit overrides (passed as kwargs, typically CLI flags)

Repository overrides never fail a scan: an unreadable file or a malformed
value falls back to the default. Explicit overrides are the caller's
responsibility and are validated strictly.

Example:
    >>> config = load_config("/path/to/repo", workers=4)
    >>> config.dup_window_tokens
    50
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, Union, get_type_hints

from .exceptions import InvalidConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

PROPERTIES_FILENAME = "stride-analyzer.properties"

DUP_WINDOW_TOKENS_DEFAULT = 50
LARGE_FILE_THRESHOLD_DEFAULT = 500
COMPLEXITY_METHOD_THRESHOLD_DEFAULT = 10

# Integer repository keys -> ScanConfig field
_INT_PROPERTIES = {
    "dup.window.tokens": "dup_window_tokens",
    "large.file.threshold": "large_file_threshold",
    "complexity.method.threshold": "complexity_method_threshold",
}

_ALLOWLIST_PREFIX = "secrets.allowlist."

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


@dataclass(frozen=True)
class ScanConfig:
    """Settings for one scan invocation.

    Attributes:
        Repository thresholds:
            dup_window_tokens: Sliding-window size for duplicate detection
            large_file_threshold: Line count above which a file is flagged
            complexity_method_threshold: Reserved, echoed in the report only

        Secret scanning:
            redact_secrets: Mask matched values in reported lines
            secret_allowlist: Regexes; matching lines are never reported

        Traversal:
            exclude_dirs: Directory names that are never walked

        Runtime:
            workers: Worker threads for file tasks (None = auto-detect)
            scan_timeout_seconds: Deadline for the whole walk
            file_timeout_seconds: Deadline for reading a single file
            max_file_size_mb: Files larger than this are treated as unreadable
    """

    dup_window_tokens: int = DUP_WINDOW_TOKENS_DEFAULT
    large_file_threshold: int = LARGE_FILE_THRESHOLD_DEFAULT
    complexity_method_threshold: int = COMPLEXITY_METHOD_THRESHOLD_DEFAULT

    redact_secrets: bool = False
    secret_allowlist: tuple[str, ...] = ()

    exclude_dirs: tuple[str, ...] = field(default_factory=lambda: (".git", ".hg", ".svn"))

    workers: Optional[int] = None
    scan_timeout_seconds: float = 300.0
    file_timeout_seconds: float = 10.0
    max_file_size_mb: float = 10.0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.dup_window_tokens < 1:
            raise ValueError("dup_window_tokens must be at least 1")
        if self.large_file_threshold < 1:
            raise ValueError("large_file_threshold must be at least 1")
        if self.complexity_method_threshold < 1:
            raise ValueError("complexity_method_threshold must be at least 1")

        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.scan_timeout_seconds <= 0:
            raise ValueError("scan_timeout_seconds must be positive")
        if self.file_timeout_seconds <= 0:
            raise ValueError("file_timeout_seconds must be positive")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")

        for pattern in self.secret_allowlist:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid secret allowlist pattern {pattern!r}: {e}")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    def thresholds(self) -> dict[str, int]:
        """Repository thresholds under their properties-file keys."""
        return {key: getattr(self, attr) for key, attr in _INT_PROPERTIES.items()}


def load_config(root: Union[str, Path, None] = None, **overrides: Any) -> ScanConfig:
    """Resolve the configuration for a scan of ``root``.

    Args:
        root: Repository root; its properties file is read if present
        **overrides: Explicit field overrides (highest priority)

    Returns:
        Validated ScanConfig instance

    Raises:
        InvalidConfigError: If an explicit override is unknown or invalid
    """
    merged: dict[str, Any] = {}

    if root is not None:
        merged.update(load_repo_properties(Path(root)))

    merged.update(_load_env_vars())

    known = {f.name for f in fields(ScanConfig)}
    for key, value in overrides.items():
        if key not in known:
            raise InvalidConfigError(key, value, "unknown setting")
        if value is None:
            continue
        merged[key] = tuple(value) if isinstance(value, list) else value

    try:
        return ScanConfig(**merged)
    except (TypeError, ValueError) as e:
        # Repository and environment values were validated on load, so an
        # explicit override is at fault.
        bad_key = next((k for k in overrides if k in str(e)), "overrides")
        raise InvalidConfigError(bad_key, overrides.get(bad_key), str(e))


def load_repo_properties(root: Path) -> dict[str, Any]:
    """Read ``stride-analyzer.properties`` from the repository root.

    Unknown keys are ignored, malformed values are dropped so the default
    applies. A missing or unreadable file yields an empty mapping.
    """
    path = root / PROPERTIES_FILENAME
    if not path.is_file():
        return {}

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return {}

    raw = parse_properties(text)
    result: dict[str, Any] = {}

    for key, attr in _INT_PROPERTIES.items():
        if key not in raw:
            continue
        try:
            value = int(raw[key])
        except ValueError:
            logger.debug("Ignoring non-integer %s=%r", key, raw[key])
            continue
        if value < 1:
            logger.debug("Ignoring out-of-range %s=%r", key, raw[key])
            continue
        result[attr] = value

    if "secrets.redact" in raw:
        flag = raw["secrets.redact"].lower()
        if flag in _TRUE_VALUES:
            result["redact_secrets"] = True
        elif flag in _FALSE_VALUES:
            result["redact_secrets"] = False

    allowlist = []
    for key in sorted(raw):
        if not key.startswith(_ALLOWLIST_PREFIX):
            continue
        try:
            re.compile(raw[key])
        except re.error:
            logger.debug("Ignoring invalid allowlist pattern %s=%r", key, raw[key])
            continue
        allowlist.append(raw[key])
    if allowlist:
        result["secret_allowlist"] = tuple(allowlist)

    if "exclude.dirs" in raw:
        result["exclude_dirs"] = tuple(
            name.strip() for name in raw["exclude.dirs"].split(",") if name.strip()
        )

    return result


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-properties style ``key=value`` / ``key: value`` lines."""
    props: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line[0] in "#!":
            continue
        match = re.match(r"([^=:\s]+)\s*[=:\s]\s*(.*)$", line)
        if match is None:
            # Bare key with no value
            props[line] = ""
            continue
        props[match.group(1)] = match.group(2).strip()
    return props


def _load_env_vars() -> dict[str, Any]:
    """Load runtime settings from STRIDE_* environment variables.

    Supported environment variables:
        STRIDE_WORKERS: int
        STRIDE_SCAN_TIMEOUT_SECONDS: float
        STRIDE_FILE_TIMEOUT_SECONDS: float
        STRIDE_MAX_FILE_SIZE_MB: float
        STRIDE_DUP_WINDOW_TOKENS: int
        STRIDE_LARGE_FILE_THRESHOLD: int
        STRIDE_REDACT_SECRETS: bool (true/false/1/0)

    Invalid values are skipped with a warning.
    """
    type_hints = get_type_hints(ScanConfig)
    result: dict[str, Any] = {}

    for config_field in fields(ScanConfig):
        env_key = f"STRIDE_{config_field.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[config_field.name])
        except ValueError as e:
            logger.warning("Ignoring invalid %s: %s", env_key, e)
            continue
        if parsed is None:
            continue

        # Run the field through validation on its own so a bad value is
        # reported against its variable instead of an explicit override.
        try:
            ScanConfig(**{config_field.name: parsed})
        except ValueError as e:
            logger.warning("Ignoring invalid %s: %s", env_key, e)
            continue
        result[config_field.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment string to the field's type.

    Returns None for types that cannot be expressed as one variable.
    """
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if getattr(type_hint, "__origin__", None) is tuple:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in _TRUE_VALUES:
            return True
        if lower in _FALSE_VALUES:
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    return None
