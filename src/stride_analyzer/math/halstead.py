"""Halstead volume approximation."""

import math


def halstead_volume(operators: int, operands: int) -> float:
    """Approximate Halstead volume: N * log2(max(n2, 1)).

    Uses the total operand count in place of the distinct-operand
    vocabulary, so the value grows with file length rather than with
    vocabulary. A file with no operands has volume 0.
    """
    return (operators + operands) * math.log2(max(operands, 1))
