"""Build a minimal .bib database from the entries cited in .bbl files.

:func:`extract` works on texts already in memory; :func:`extract_files`
reads the inputs from disk and can write the result.  Both return an
:class:`ExtractionResult` carrying the output text and the diagnostics
(duplicates and missing keys) for the caller to present.  A
:class:`~bibextract.core.ParseError` aborts the extraction before anything is
written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from . import helpers, scanner, utils
from .core import BibEntry, Diagnostic, DiagnosticKind
from .registry import EntryRegistry
from .scanner import BibFile


@dataclass(frozen=True)
class ExtractionResult:
    output: str
    diagnostics: tuple[Diagnostic, ...] = ()
    required_keys: tuple[str, ...] = ()
    entry_count: int = 0
    # every entry scanned from the databases, cited or not
    entries: tuple[BibEntry, ...] = ()

    def _keys_of(self, kind: DiagnosticKind) -> list[str]:
        return utils.unique_sorted(d.key for d in self.diagnostics if d.kind is kind)

    @property
    def missing_keys(self) -> list[str]:
        return self._keys_of(DiagnosticKind.MISSING_KEY)

    @property
    def conflicting_keys(self) -> list[str]:
        return self._keys_of(DiagnosticKind.DUPLICATE_CONFLICTING)

    @property
    def duplicate_keys(self) -> list[str]:
        """Keys defined more than once, whether or not the copies agree."""
        return utils.unique_sorted(
            d.key for d in self.diagnostics if d.kind is not DiagnosticKind.MISSING_KEY
        )


def select_entries(keys: Sequence[str], entries: Iterable[BibEntry]) -> ExtractionResult:
    """Resolve *keys* (sorted, unique) against *entries* and join the hits."""
    entries = tuple(entries)
    registry, diagnostics = EntryRegistry.build(entries)
    blocks: list[str] = []
    for key in keys:
        entry = registry.get(key)
        if entry is None:
            diagnostics.append(Diagnostic.missing_key(key))
            continue
        blocks.append(entry.raw)
    return ExtractionResult(
        output=utils.join_entries(blocks),
        diagnostics=tuple(diagnostics),
        required_keys=tuple(keys),
        entry_count=len(blocks),
        entries=entries,
    )


def extract(bbl_texts: Iterable[str], bib_texts: Iterable[str]) -> ExtractionResult:
    """Return the entries of *bib_texts* cited in *bbl_texts*.

    Entries are emitted in ascending key order, separated by one blank line.
    """
    if isinstance(bbl_texts, str):
        bbl_texts = [bbl_texts]
    if isinstance(bib_texts, str):
        bib_texts = [bib_texts]
    keys = helpers.required_keys(bbl_texts)
    return select_entries(keys, scanner.scan_databases(bib_texts))


def write_output(output: str, destination: Path | str) -> Path:
    path = Path(destination)
    utils.write_text(path, output)
    return path


def _wants_output(out_file: Path | str | None) -> bool:
    # Path("") is Path("."), so an empty destination never names a file
    return out_file is not None and Path(out_file) != Path("")


def _as_paths(paths: Path | str | Iterable[Path | str]) -> list[Path]:
    # a single file name is accepted wherever a list of them is
    if isinstance(paths, (str, Path)):
        return [Path(paths)]
    return [Path(p) for p in paths]


def extract_files(
    bbl_files: Path | str | Iterable[Path | str],
    bib_files: Path | str | Iterable[Path | str],
    out_file: Path | str | None = None,
) -> ExtractionResult:
    """File-level counterpart of :func:`extract`.

    Every input is read fully before scanning.  A parse error names the
    offending .bib file and nothing is written.  When *out_file* is empty the
    result is only returned.
    """
    bbl_texts = [utils.read_text(path) for path in _as_paths(bbl_files)]
    entries: list[BibEntry] = []
    for path in _as_paths(bib_files):
        entries.extend(BibFile(path).entries)

    result = select_entries(helpers.required_keys(bbl_texts), entries)
    if _wants_output(out_file):
        write_output(result.output, out_file)
    return result


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[str]:
    """Return one warning message per diagnostic.

    When keys are duplicated but every copy agrees, a closing note says so.
    """
    diagnostics = list(diagnostics)
    messages = [str(d) for d in diagnostics]
    kinds = {d.kind for d in diagnostics}
    if DiagnosticKind.DUPLICATE_IDENTICAL in kinds and DiagnosticKind.DUPLICATE_CONFLICTING not in kinds:
        messages.append("duplicate entries, but identical content")
    return messages
