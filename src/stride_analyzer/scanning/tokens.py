"""Tokenizer for Halstead counts and duplicate windows.

Splits a line into word runs and operator runs. Other punctuation
(brackets, separators, quotes) is dropped.
"""

import re

SINGLE_CHAR_OPERATORS = frozenset("+-*/%=!<>|&^~")

MULTI_CHAR_OPERATORS = frozenset({"==", "!=", "<=", ">=", "&&", "||", "++", "--", "->", "::"})

# Longest operators first so "==" is not read as two "="
_TOKEN_RE = re.compile(
    r"\w+"
    r"|==|!=|<=|>=|&&|\|\||\+\+|--|->|::"
    r"|[+\-*/%=!<>|&^~]"
)


def tokenize(text: str) -> list[str]:
    """Split text into non-empty word and operator tokens."""
    return _TOKEN_RE.findall(text)


def is_operator(token: str) -> bool:
    if len(token) == 1:
        return token in SINGLE_CHAR_OPERATORS
    return token in MULTI_CHAR_OPERATORS
