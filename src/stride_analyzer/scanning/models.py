"""Data models for the scanning layer."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineSignals:
    """Lexical observations for one physical line."""

    is_comment: bool = False
    has_todo: bool = False
    has_branch: bool = False
    has_boolean_operator: bool = False
    is_function: bool = False
    is_class: bool = False
    is_import: bool = False
    is_secret: bool = False
    opening_braces: int = 0
    closing_braces: int = 0
    operators: int = 0
    operands: int = 0
    tokens: tuple[str, ...] = ()


@dataclass(frozen=True)
class SecretMatch:
    """A line that looks like it carries a credential."""

    path: str
    line_number: int
    line: str

    def __str__(self) -> str:
        return f"Potential secret in {self.path}:{self.line_number} -> {self.line}"


@dataclass(frozen=True)
class FileRecord:
    """Raw observations for a single file"""

    path: str
    extension: str
    lines: int
    comment_lines: int
    todo_count: int
    functions: int
    classes: int
    max_nesting: int
    cognitive_complexity: int
    cyclomatic_complexity: int
    imports: int
    halstead_volume: float
    window_hashes: tuple[str, ...] = ()
    secrets: tuple[SecretMatch, ...] = field(default_factory=tuple)

    @property
    def comment_density(self) -> float:
        """Comment lines per line, rounded to 4 decimals."""
        if self.lines == 0:
            return 0.0
        return round(self.comment_lines / self.lines, 4)


@dataclass(frozen=True)
class DuplicateBlock:
    """A token window whose digest occurs in more than one file."""

    digest: str
    files: tuple[str, ...]

    def __str__(self) -> str:
        return "Duplicate block across: " + ", ".join(self.files)
