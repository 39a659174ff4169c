"""Brace-balanced scanner splitting .bib text into raw entries.

The grammar the scanner understands is deliberately small::

    content = ({comment} entry)* {comment}
    comment = anything before the first '@' or between a closing '}' and the next '@'
    entry   = '@' type '{' key ',' nested '}'

Entry bodies are never interpreted; nesting is tracked only so that the end
of each entry can be found.  An entry whose braces never balance runs to the
end of the text instead of failing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from . import utils
from .core import BibEntry, ParseError

ENTRY_START = "@"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
KEY_END = ","


class Cursor:
    """A position in a text, moved forward only by the scanning functions."""

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def next_occurrence_of(self, char: str) -> int | None:
        """Return the index of the next *char* at or after the cursor."""
        idx = self.text.find(char, self.pos)
        return None if idx == -1 else idx

    def skip_to(self, char: str) -> bool:
        """Move onto the next *char*, or to the end of the text if there is none."""
        idx = self.next_occurrence_of(char)
        if idx is None:
            self.pos = len(self.text)
            return False
        self.pos = idx
        return True

    def advance_to(self, char: str) -> int:
        """Move onto the next *char*; raise :class:`ParseError` if there is none."""
        idx = self.next_occurrence_of(char)
        if idx is None:
            raise ParseError(self.pos, char)
        self.pos = idx
        return idx


def _find_entry_end(cursor: Cursor) -> None:
    # the cursor sits just past the entry's opening brace
    depth = 1
    while depth > 0:
        left = cursor.next_occurrence_of(OPEN_BRACE)
        right = cursor.next_occurrence_of(CLOSE_BRACE)
        if right is None:
            # unbalanced: the entry swallows the rest of the text
            cursor.pos = len(cursor.text)
            return
        if left is not None and left < right:
            depth += 1
            cursor.pos = left + 1
        else:
            depth -= 1
            cursor.pos = right + 1


def scan_entry(cursor: Cursor, source: str | None = None) -> BibEntry:
    """Scan the entry starting at the cursor, which must be on an ``@``."""
    start = cursor.pos
    open_brace = cursor.advance_to(OPEN_BRACE)
    comma = cursor.advance_to(KEY_END)
    key = cursor.text[open_brace + 1:comma]

    cursor.pos = open_brace + 1
    _find_entry_end(cursor)
    return BibEntry(key=key, raw=cursor.text[start:cursor.pos], start=start, end=cursor.pos,
                    source=source)


def scan_entries(text: str, source: str | None = None) -> list[BibEntry]:
    """Return every top-level entry of *text* in document order.

    *source* is recorded on each entry; it does not affect scanning.
    """
    cursor = Cursor(text)
    entries: list[BibEntry] = []
    while cursor.skip_to(ENTRY_START):
        entries.append(scan_entry(cursor, source))
    return entries


def scan_databases(texts: Iterable[str]) -> list[BibEntry]:
    """Scan each text independently and concatenate the results."""
    entries: list[BibEntry] = []
    for text in texts:
        entries.extend(scan_entries(text))
    return entries


def commentary(text: str, entries: Iterable[BibEntry]) -> list[str]:
    """Return the text between the scanned *entries*, including before and after.

    Interleaving the result with the raw entry texts rebuilds *text*.
    """
    pieces: list[str] = []
    pos = 0
    for entry in entries:
        pieces.append(text[pos:entry.start])
        pos = entry.end
    pieces.append(text[pos:])
    return pieces


class BibFile:
    """Lightweight wrapper around a .bib file and its scanned entries.

    The whole file is read into memory once; ``entries`` are the records
    found by :func:`scan_entries` in document order.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.text = ""
        self.entries: list[BibEntry] = []
        self.read()

    def read(self) -> None:
        self.text = utils.read_text(self.path)
        try:
            self.entries = scan_entries(self.text, source=str(self.path))
        except ParseError as exc:
            raise exc.with_source(self.path) from exc

    @property
    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)
