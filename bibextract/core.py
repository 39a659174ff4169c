"""Core data structures for the bibextract package.

This module contains the :class:`BibEntry` record produced by the scanner,
the diagnostic types collected while building the combined database and
the :class:`ParseError` raised for malformed input.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class ParseError(ValueError):
    """Raised when an entry header is missing a required delimiter.

    ``offset`` is the 0-based position in the text where the search for
    ``expected`` started; ``source`` names the file when known.
    """

    def __init__(self, offset: int, expected: str, source: str | None = None):
        self.offset = offset
        self.expected = expected
        self.source = source
        where = f"{source}: " if source else ""
        super().__init__(f"{where}expected {expected!r} after offset {offset}")

    def with_source(self, source: Path | str) -> "ParseError":
        return ParseError(self.offset, self.expected, source=str(source))


@dataclass(frozen=True)
class BibEntry:
    """A single database entry.

    ``key`` is the literal text between the opening brace and the first comma
    (never trimmed), ``raw`` is the verbatim source span from ``@`` through
    the matching closing brace, and ``start``/``end`` delimit that span in
    the scanned text (``end`` exclusive).  ``source`` names the file the
    entry was read from, when known.
    """

    key: str
    raw: str
    start: int = 0
    end: int = 0
    source: str | None = None


class DiagnosticKind(enum.Enum):
    DUPLICATE_IDENTICAL = "duplicate-identical"
    DUPLICATE_CONFLICTING = "duplicate-conflicting"
    MISSING_KEY = "missing-key"


_MESSAGES = {
    DiagnosticKind.DUPLICATE_IDENTICAL: "duplicate entries with identical content for key {key}",
    DiagnosticKind.DUPLICATE_CONFLICTING: "nonidentical entries for key {key}",
    DiagnosticKind.MISSING_KEY: "no entry for key {key}",
}


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal condition found while building the output."""

    kind: DiagnosticKind
    key: str

    @classmethod
    def duplicate_identical(cls, key: str) -> "Diagnostic":
        return cls(DiagnosticKind.DUPLICATE_IDENTICAL, key)

    @classmethod
    def duplicate_conflicting(cls, key: str) -> "Diagnostic":
        return cls(DiagnosticKind.DUPLICATE_CONFLICTING, key)

    @classmethod
    def missing_key(cls, key: str) -> "Diagnostic":
        return cls(DiagnosticKind.MISSING_KEY, key)

    def __str__(self) -> str:
        return _MESSAGES[self.kind].format(key=self.key)

