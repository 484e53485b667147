"""Numeric formulas used by the aggregate."""

from .halstead import halstead_volume
from .maintainability import clamp, maintainability_index, mean

__all__ = ["halstead_volume", "maintainability_index", "mean", "clamp"]
