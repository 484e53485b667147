"""Repository aggregate and its builder."""

from .aggregate import AggregateBuilder
from .models import CoupledFile, LargeFile, RepoMetrics

__all__ = ["AggregateBuilder", "RepoMetrics", "LargeFile", "CoupledFile"]
