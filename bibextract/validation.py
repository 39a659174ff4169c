"""Optional checks run on an extracted database.

The scanner treats entry bodies as opaque text, so it will happily copy an
entry that BibTeX itself cannot read.  These checks re-parse the result with
``bibtexparser`` and flag keys that are likely to cause trouble when the
extracted file is used.
"""

from __future__ import annotations

from typing import Iterable, List

import bibtexparser  # type: ignore[import]
from bibtexparser.bparser import BibTexParser  # type: ignore[import]

from .core import BibEntry
from .extract import ExtractionResult
from . import scanner


def _parser() -> BibTexParser:
    parser = BibTexParser(common_strings=True)
    parser.ignore_nonstandard_types = False
    parser.homogenise_fields = False
    return parser


def parsed_keys(text: str) -> set[str]:
    """Return the entry keys ``bibtexparser`` finds in *text*."""
    database = bibtexparser.loads(text, parser=_parser())
    return {entry.get('ID', '') for entry in database.entries}


def check_bibtex_syntax(text: str) -> List[str]:
    """Return the scanned keys of *text* that ``bibtexparser`` could not read.

    Each entry is parsed on its own so that one broken entry does not hide
    the others.  An empty list means every entry copied into *text* also
    parses as BibTeX.  Keys are compared without surrounding whitespace
    because ``bibtexparser`` strips it.
    """
    unreadable: List[str] = []
    for entry in scanner.scan_entries(text):
        try:
            seen = parsed_keys(entry.raw)
        except Exception:
            seen = set()
        if entry.key.strip() not in seen:
            unreadable.append(entry.key)
    return unreadable


def check_key_whitespace(entries: Iterable[BibEntry]) -> List[BibEntry]:
    r"""Return the entries whose key has leading or trailing whitespace.

    Such keys are kept verbatim and so never match a ``\bibitem`` key.
    """
    return [entry for entry in entries if entry.key != entry.key.strip()]


def generate_summary(result: ExtractionResult) -> List[str]:
    """Return the summary lines printed by the command line interface."""
    lines = [
        f"Cited keys: {len(result.required_keys)}",
        f"Entries written: {result.entry_count}",
    ]
    if result.missing_keys:
        lines.append(f"  Missing ({len(result.missing_keys)}): {', '.join(result.missing_keys[:10])}")
        if len(result.missing_keys) > 10:
            lines.append("  ...")
    if result.duplicate_keys:
        lines.append(f"  Duplicated keys: {len(result.duplicate_keys)}"
                     f" ({len(result.conflicting_keys)} with differing content)")
    return lines
