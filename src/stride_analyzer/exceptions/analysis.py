"""Analysis-related exceptions: file access and scan interruption."""

from pathlib import Path

from .base import StrideError


class AnalysisError(StrideError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ScanCancelledError(AnalysisError):
    """Raised when a scan is cancelled or runs past its deadline."""

    def __init__(self, reason: str):
        super().__init__(f"Scan cancelled: {reason}", details={"reason": reason})
        self.reason = reason
