"""File metrics accumulator: one file in, one FileRecord out."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..config import ScanConfig
from ..file_ops import safe_iter_lines
from ..math import halstead_volume
from .classifier import apply_nesting, classify_line
from .duplicates import WindowHasher
from .models import FileRecord, SecretMatch
from .secrets import SecretScanner

NO_EXTENSION = "no_extension"


def get_file_extension(file_name: str) -> str:
    """Lower-cased suffix after the last dot, or ``no_extension``.

    Dotfiles (``.gitignore``) and names ending in a dot have no extension.
    """
    idx = file_name.rfind(".")
    if 0 < idx < len(file_name) - 1:
        return file_name[idx + 1 :].lower()
    return NO_EXTENSION


class FileAccumulator:
    """Streams a file through the line classifier into a FileRecord.

    Safe to share across worker threads: all per-file state lives in
    ``accumulate``.
    """

    def __init__(self, config: ScanConfig, scanner: Optional[SecretScanner] = None):
        self.config = config
        self.scanner = scanner or SecretScanner(
            allowlist=config.secret_allowlist, redact=config.redact_secrets
        )

    def accumulate(self, filepath: Path) -> FileRecord:
        """Read and measure one file.

        Raises:
            FileAccessError: If the file is unreadable, binary, too large or
                too slow to read. The caller skips the file entirely.
        """
        path = os.path.abspath(filepath)

        lines = 0
        comments = 0
        todos = 0
        functions = 0
        classes = 0
        imports = 0
        cyclomatic = 1
        cognitive = 0
        depth = 0
        max_depth = 0
        operators = 0
        operands = 0
        secrets: list[SecretMatch] = []
        hasher = WindowHasher(self.config.dup_window_tokens)

        for line in safe_iter_lines(
            Path(filepath),
            max_bytes=self.config.max_file_size_bytes,
            timeout_seconds=self.config.file_timeout_seconds,
        ):
            lines += 1
            signals = classify_line(line)

            comments += signals.is_comment
            todos += signals.has_todo
            cyclomatic += signals.has_branch
            cognitive += signals.has_boolean_operator
            functions += signals.is_function
            classes += signals.is_class
            imports += signals.is_import

            depth, brace_weight = apply_nesting(depth, signals)
            cognitive += brace_weight
            max_depth = max(max_depth, depth)

            operators += signals.operators
            operands += signals.operands
            hasher.feed(signals.tokens)

            if signals.is_secret:
                match = self.scanner.scan_line(path, lines, line, flagged=True)
                if match is not None:
                    secrets.append(match)

        return FileRecord(
            path=path,
            extension=get_file_extension(os.path.basename(path)),
            lines=lines,
            comment_lines=comments,
            todo_count=todos,
            functions=functions,
            classes=classes,
            max_nesting=max_depth,
            cognitive_complexity=cognitive,
            cyclomatic_complexity=cyclomatic,
            imports=imports,
            halstead_volume=halstead_volume(operators, operands),
            window_hashes=hasher.finish(),
            secrets=tuple(secrets),
        )
