"""Exception hierarchy for Stride Analyzer."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ScanCancelledError,
)
from .base import StrideError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "StrideError",
    "AnalysisError",
    "FileAccessError",
    "ScanCancelledError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
