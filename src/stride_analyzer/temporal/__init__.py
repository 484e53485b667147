"""Version-control history: churn per path."""

from .churn import ChurnSource, EmptyChurnSource, StaticChurnSource, compute_churn
from .git_extractor import GitLogChurnSource

__all__ = [
    "ChurnSource",
    "EmptyChurnSource",
    "StaticChurnSource",
    "GitLogChurnSource",
    "compute_churn",
]
