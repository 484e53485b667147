"""Lexical line classifier.

Each signal is one predicate in ``LINE_PREDICATES``; extending the
heuristics for another language means adding or replacing a pattern here,
never touching the accumulator. Nothing here parses: every check is a
regex or substring test on a single physical line.
"""

from __future__ import annotations

import re
from typing import Callable

from .models import LineSignals
from .secrets import SecretScanner
from .tokens import is_operator, tokenize

COMMENT_PREFIXES = ("//", "/*", "*", "#")

TODO_PATTERN = re.compile(r"TODO|FIXME", re.IGNORECASE)

BRANCH_PATTERN = re.compile(r"\b(if|for|while|case|catch|switch)\b")

BOOLEAN_MARKERS = ("&&", "||", "?", ":")

FUNCTION_PATTERN = re.compile(
    r"(public|private|protected)?\s*(static\s+)?[\w<>\[\]]+\s+\w+\s*\([^)]*\)\s*\{?"
)

CLASS_PATTERN = re.compile(r"\b(class|interface|enum)\s+\w+")

IMPORT_PATTERN = re.compile(r"^(import\s+|#include\s+|require\(|from\s+\S+\s+import)")

_SECRET_HEURISTICS = SecretScanner()

# Predicate signature: (raw line, trimmed line) -> bool
LinePredicate = Callable[[str, str], bool]

LINE_PREDICATES: dict[str, LinePredicate] = {
    "is_comment": lambda raw, trimmed: trimmed.startswith(COMMENT_PREFIXES),
    "has_todo": lambda raw, trimmed: TODO_PATTERN.search(raw) is not None,
    "has_branch": lambda raw, trimmed: BRANCH_PATTERN.search(trimmed) is not None,
    "has_boolean_operator": lambda raw, trimmed: any(m in trimmed for m in BOOLEAN_MARKERS),
    "is_function": lambda raw, trimmed: FUNCTION_PATTERN.search(trimmed) is not None,
    "is_class": lambda raw, trimmed: CLASS_PATTERN.search(trimmed) is not None,
    "is_import": lambda raw, trimmed: IMPORT_PATTERN.match(trimmed) is not None,
    "is_secret": lambda raw, trimmed: _SECRET_HEURISTICS.matches(raw),
}


def classify_line(line: str) -> LineSignals:
    """Compute every lexical signal for one physical line."""
    trimmed = line.strip()
    flags = {name: predicate(line, trimmed) for name, predicate in LINE_PREDICATES.items()}

    tokens = tokenize(trimmed)
    operators = sum(1 for t in tokens if is_operator(t))

    return LineSignals(
        opening_braces=trimmed.count("{"),
        closing_braces=trimmed.count("}"),
        operators=operators,
        operands=len(tokens) - operators,
        tokens=tuple(tokens),
        **flags,
    )


def apply_nesting(depth: int, signals: LineSignals) -> tuple[int, int]:
    """Advance brace nesting across one line.

    Each opening brace increments the depth and costs
    ``max(1, depth // 2)`` cognitive weight at the depth it opens.
    Closing braces then decrement, floored at 0.

    Returns:
        (new depth, cognitive weight added by the braces)
    """
    weight = 0
    for _ in range(signals.opening_braces):
        depth += 1
        weight += max(1, depth // 2)
    depth = max(0, depth - signals.closing_braces)
    return depth, weight
