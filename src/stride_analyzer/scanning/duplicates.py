"""Exact-match duplicate block detection.

Each file's token stream is cut into overlapping fixed-size windows
(sliding by half a window) and every window is hashed. After all files
are hashed, any digest seen in more than one distinct file is reported as
a duplicate block.

Only identical token runs are found. Renamed identifiers or an inserted
token shift the windows and the match is lost.
"""

from __future__ import annotations

import hashlib
from collections import defaultdict
from collections.abc import Iterable, Mapping

from .models import DuplicateBlock

# Smallest leftover buffer hashed at end of file
MIN_TAIL_TOKENS = 4


def hash_tokens(tokens: Iterable[str]) -> str:
    """SHA-1 over the UTF-8 bytes of the tokens, NUL-separated."""
    digest = hashlib.sha1()
    for token in tokens:
        digest.update(token.encode("utf-8"))
        digest.update(b"\x00")
    return digest.hexdigest()


class WindowHasher:
    """Rolling token buffer for one file.

    Usage:
        hasher = WindowHasher(window=50)
        for line_tokens in ...:
            hasher.feed(line_tokens)
        hashes = hasher.finish()
    """

    def __init__(self, window: int):
        if window < 1:
            raise ValueError("window must be at least 1")
        self.window = window
        self.slide = max(1, window // 2)
        self._buffer: list[str] = []
        self._hashes: list[str] = []

    def feed(self, tokens: Iterable[str]) -> None:
        for token in tokens:
            self._buffer.append(token)
            if len(self._buffer) >= self.window:
                self._hashes.append(hash_tokens(self._buffer))
                del self._buffer[: self.slide]

    def finish(self) -> tuple[str, ...]:
        """Hash the leftover buffer if it is long enough, return all hashes."""
        if self._buffer and len(self._buffer) >= max(MIN_TAIL_TOKENS, self.window // 4):
            self._hashes.append(hash_tokens(self._buffer))
        self._buffer = []
        return tuple(self._hashes)


def find_duplicate_blocks(file_hashes: Mapping[str, Iterable[str]]) -> list[DuplicateBlock]:
    """Invert path -> window hashes and report digests shared across files.

    A window repeated inside a single file is not a duplicate block.

    Returns:
        DuplicateBlock list ordered by (files, digest) so repeated scans of
        the same tree report identically.
    """
    index: dict[str, set[str]] = defaultdict(set)
    for path, hashes in file_hashes.items():
        for digest in hashes:
            index[digest].add(path)

    blocks = [
        DuplicateBlock(digest=digest, files=tuple(sorted(paths)))
        for digest, paths in index.items()
        if len(paths) > 1
    ]
    blocks.sort(key=lambda b: (b.files, b.digest))
    return blocks
