"""Data models for the suggestion engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Suggestion tags, rendered as ``[LABEL]``."""

    ERROR = "ERROR"
    HIGH_PRIORITY = "HIGH PRIORITY"
    LARGE_FILE = "LARGE FILE"
    DOC_GAP = "DOC GAP"
    COHESION = "COHESION"
    NESTING = "NESTING"
    TECH_DEBT = "TECH DEBT"
    STRUCTURE = "STRUCTURE"
    MODULARIZE = "MODULARIZE"
    REFACTOR = "REFACTOR"
    INFO = "INFO"
    HALSTEAD = "HALSTEAD"
    CLEANUP = "CLEANUP"


@dataclass(frozen=True)
class Suggestion:
    category: Category
    message: str  # "Refactor file: /repo/Big.java (Severity=1203.4)"

    def __str__(self) -> str:
        # Technical-debt flags are reported verbatim, untagged.
        if self.category is Category.TECH_DEBT:
            return self.message
        return f"[{self.category.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category.value, "message": self.message, "text": str(self)}
