"""Heuristic credential detection.

Flags lines that look like they embed a credential:

- a credential keyword assigned a value (``api_key = "..."``, ``token: ...``)
- a known provider token prefix (cloud access keys, chat tokens) or a
  private-key PEM header
- a long base64-looking run (40+ characters)

This is a review aid, not a security guarantee. License headers, content
hashes and generated code produce false positives; suppress them with
allowlist patterns, the inline ``stride:allow-secret`` marker, or a
``suppress`` callback.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional

from .models import SecretMatch

# keyword (also as the tail of a name such as accessToken), an optional
# closing quote, = or : (not ==), then an optionally quoted value. The
# keyword must end the name: tokenizer and api_key_count never match.
CREDENTIAL_ASSIGNMENT = re.compile(
    r"(?i)(?:api[_-]?key|secret|token|passwd|password)[\"']?"
    r"\s*[=:](?!=)\s*[\"']?([^\s\"',;]+)"
)

PROVIDER_TOKEN = re.compile(
    r"(?i)(AKIA|AIza|SG\.|xoxp-|xoxb-|xoxa-|ghp_)([A-Za-z0-9\-_=+/.]{16,})"
)

PRIVATE_KEY_HEADER = re.compile(r"-----BEGIN (?:RSA |EC |DSA |OPENSSH |ENCRYPTED )?PRIVATE KEY-----")

BASE64_RUN = re.compile(r"(?<![A-Za-z0-9+/])([A-Za-z0-9+/]{40,}={0,2})(?![A-Za-z0-9+/=])")

ALLOW_MARKER = "stride:allow-secret"

SuppressHook = Callable[[str, int, str], bool]


class SecretScanner:
    """Matches lines against the credential heuristics.

    Args:
        allowlist: Regexes; a line matching any of them is never reported
        suppress: Optional ``(path, line_number, text) -> bool`` hook
        redact: Mask matched values in the reported line
    """

    def __init__(
        self,
        allowlist: Iterable[str] = (),
        suppress: Optional[SuppressHook] = None,
        redact: bool = False,
    ):
        self.allowlist = [re.compile(p) for p in allowlist]
        self.suppress = suppress
        self.redact = redact

    def matches(self, line: str) -> bool:
        """Whether the raw heuristics fire on ``line`` (no suppression)."""
        return bool(
            CREDENTIAL_ASSIGNMENT.search(line)
            or PROVIDER_TOKEN.search(line)
            or PRIVATE_KEY_HEADER.search(line)
            or BASE64_RUN.search(line)
        )

    def is_suppressed(self, path: str, line_number: int, line: str) -> bool:
        if ALLOW_MARKER in line:
            return True
        if any(p.search(line) for p in self.allowlist):
            return True
        return self.suppress is not None and self.suppress(path, line_number, line)

    def scan_line(
        self, path: str, line_number: int, line: str, flagged: Optional[bool] = None
    ) -> Optional[SecretMatch]:
        """Return a SecretMatch for a flagged, unsuppressed line.

        Pass ``flagged`` when the heuristics already ran on this line (the
        classifier's ``is_secret``) so they are not evaluated again.
        """
        if flagged is None:
            flagged = self.matches(line)
        if not flagged:
            return None
        if self.is_suppressed(path, line_number, line):
            return None
        text = line.strip()
        if self.redact:
            text = redact_line(text)
        return SecretMatch(path=path, line_number=line_number, line=text)


def redact_line(line: str) -> str:
    """Mask every matched value, keeping its first 4 characters."""

    def _mask(value: str) -> str:
        return value[:4] + "*" * max(0, len(value) - 4)

    def _mask_group(group: int) -> Callable[[re.Match], str]:
        def _sub(match: re.Match) -> str:
            start, end = match.span(group)
            whole_start = match.start()
            text = match.group(0)
            return (
                text[: start - whole_start]
                + _mask(match.group(group))
                + text[end - whole_start :]
            )

        return _sub

    line = CREDENTIAL_ASSIGNMENT.sub(_mask_group(1), line)
    line = PROVIDER_TOKEN.sub(_mask_group(2), line)
    line = BASE64_RUN.sub(_mask_group(1), line)
    return line
