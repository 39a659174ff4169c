"""Key lookup over scanned entries, with duplicate detection."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from .core import BibEntry, Diagnostic


def find_duplicates(entries: Iterable[BibEntry]) -> list[Diagnostic]:
    """Report every adjacent pair of same-key entries after a stable sort.

    A pair whose raw texts differ is reported as conflicting only; an
    identical pair as identical only.  Three copies of a key give two
    diagnostics.
    """
    ordered = sorted(entries, key=lambda e: e.key)
    diagnostics: list[Diagnostic] = []
    for first, second in zip(ordered, ordered[1:]):
        if first.key != second.key:
            continue
        if first.raw == second.raw:
            diagnostics.append(Diagnostic.duplicate_identical(first.key))
        else:
            diagnostics.append(Diagnostic.duplicate_conflicting(first.key))
    return diagnostics


class EntryRegistry(Mapping[str, BibEntry]):
    """Read-only mapping from citation key to entry.

    When a key occurs more than once the entry scanned last is the one kept.
    """

    def __init__(self, entries: Iterable[BibEntry] = ()):
        self._entries: dict[str, BibEntry] = {}
        for entry in entries:
            self._entries[entry.key] = entry

    @classmethod
    def build(cls, entries: Iterable[BibEntry]) -> tuple["EntryRegistry", list[Diagnostic]]:
        """Return the registry for *entries* and the duplicate diagnostics."""
        entries = list(entries)
        return cls(entries), find_duplicates(entries)

    def __getitem__(self, key: str) -> BibEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EntryRegistry({len(self)} entries)"
