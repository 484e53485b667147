"""Base formatter interface for Stride Analyzer output rendering."""

from abc import ABC, abstractmethod
from typing import List

from ..insights import Suggestion
from ..metrics import RepoMetrics


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, metrics: RepoMetrics, suggestions: List[Suggestion]) -> None:
        """Render the report to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, metrics: RepoMetrics, suggestions: List[Suggestion]) -> str:
        """Return formatted string representation of the report."""
