from __future__ import annotations

from pathlib import Path
from typing import Iterable
import re

from . import utils


# A compiled bibliography (.bbl, as written by BibTeX) lists one
# ``\bibitem{key}`` per cited work.  Only plain word-character keys are
# recognised; optional labels such as ``\bibitem[Doe 2020]{key}`` are not.
BIBITEM_PATTERN = re.compile(r'\\bibitem\{(\w+)\}')


def extract_citation_keys(text: str) -> list[str]:
    r"""Return the ``\bibitem`` keys of *text* in document order.

    Repeats are kept; the keys are returned exactly as written.
    """
    return BIBITEM_PATTERN.findall(text)


def extract_citation_keys_from_texts(texts: Iterable[str]) -> list[str]:
    keys: list[str] = []
    for text in texts:
        keys.extend(extract_citation_keys(text))
    return keys


def required_keys(texts: Iterable[str]) -> list[str]:
    """Return the sorted, duplicate-free keys cited across *texts*."""
    return utils.unique_sorted(extract_citation_keys_from_texts(texts))


def extract_citations_from_bbl(bbl_file: Path | str) -> list[str]:
    """Read a .bbl file and return its citation keys in document order."""
    return extract_citation_keys(utils.read_text(bbl_file))


# Discovery mirrors running the tool from a LaTeX build directory: inputs
# are looked up relative to the current working directory.

def collect_all_bbl_files() -> list[Path]:
    """Return every ``.bbl`` file in the current directory."""
    return sorted(Path('.').glob('*.bbl'))


def collect_all_bib_files(exclude: Iterable[Path | str] = ()) -> list[Path]:
    """Return every ``.bib`` file in the current directory.

    Paths in *exclude* are skipped; the CLI passes the output file so that a
    second run does not read its own result.
    """
    skipped = {Path(p).resolve() for p in exclude}
    bib_list: list[Path] = []
    for path in sorted(Path('.').glob('*.bib')):
        if path.resolve() in skipped:
            continue
        bib_list.append(path)
    return bib_list
