"""Suggestion engine: ranked, categorized refactor advice."""

from .engine import SuggestionEngine, compute_severity, generate_suggestions
from .models import Category, Suggestion

__all__ = [
    "SuggestionEngine",
    "compute_severity",
    "generate_suggestions",
    "Category",
    "Suggestion",
]
