"""Base exception for Stride Analyzer."""

from typing import Any, Dict, Optional


class StrideError(Exception):
    """Base exception for all Stride Analyzer errors.

    ``message`` is the one-line summary shown to users; ``details`` holds
    the structured context (path, key, reason) behind it.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form, shaped like an error-only report."""
        data: Dict[str, Any] = {"error": self.message}
        if self.details:
            data["details"] = dict(self.details)
        return data
