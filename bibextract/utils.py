"""Text utilities shared by the scanners and the extractor."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

# Input files are read as UTF-8, but undecodable bytes are carried through
# unchanged so that the output is byte-identical to the source spans.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

# exactly one blank line between consecutive entries
ENTRY_SEPARATOR = "\n\n"


def unique_sorted(keys: Iterable[str]) -> list[str]:
    """Return the distinct *keys* in plain code point order.

    ``sorted`` on ``str`` is neither locale aware nor case-insensitive, which
    is what keeps the output order reproducible across machines.
    """
    return sorted(set(keys))


def join_entries(blocks: Iterable[str]) -> str:
    """Join raw entry texts with a single blank line and nothing around them."""
    return ENTRY_SEPARATOR.join(blocks)


def read_text(path: Path | str) -> str:
    with open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
        return f.read()


def write_text(path: Path | str, text: str) -> None:
    """Write *text* to *path*; the handle is closed even if the write fails."""
    with open(path, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
        f.write(text)
