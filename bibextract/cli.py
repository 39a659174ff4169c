#!/usr/bin/env python3
"""Command line interface for the *bibextract* package.

Given the ``.bbl`` file(s) BibTeX produced for a document and the ``.bib``
database(s) it was built from, write a ``.bib`` file holding only the cited
entries.  The heavy lifting lives in :mod:`bibextract.extract`; this module
only resolves the input files and presents the diagnostics.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import helpers, utils, validation
from .core import BibEntry, ParseError
from .extract import extract_files, format_diagnostics


def _warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def _error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bibextract',
        description='Extract the BibTeX entries cited in compiled bibliographies',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s paper.bbl -b refs.bib -o paper.bib   # write the cited entries
  %(prog)s a.bbl b.bbl -b x.bib -b y.bib         # combine several inputs
  %(prog)s                                       # every .bbl/.bib here, print result
  %(prog)s --strict --check -o paper.bib         # fail on conflicts or missing keys
        """,
    )
    parser.add_argument('bbl', nargs='*', type=Path,
                        help='Compiled bibliography files (default: every .bbl in the current directory)')
    parser.add_argument('--bib', '-b', action='append', type=Path, default=[],
                        help='Bibliography database to take entries from; repeat for several '
                             '(default: every .bib in the current directory)')
    parser.add_argument('--output', '-o', type=Path,
                        help='Write the extracted entries here instead of printing them')
    parser.add_argument('--check', action='store_true',
                        help='Re-parse the extracted entries with bibtexparser and report problems')
    parser.add_argument('--strict', action='store_true',
                        help='Exit with status 1 on conflicting duplicates, missing keys or failed checks')
    parser.add_argument('--quiet', '-q', action='store_true', help='Do not print warnings or the summary')
    return parser


def _run_checks(output: str, entries: tuple[BibEntry, ...]) -> list[str]:
    issues = [f"bibtexparser could not read the entry for key {key}"
              for key in validation.check_bibtex_syntax(output)]
    for entry in validation.check_key_whitespace(entries):
        where = f"{Path(entry.source).name}: " if entry.source else ""
        issues.append(f"{where}key {entry.key!r} has surrounding whitespace and cannot be cited")
    return issues


def _print_output(output: str) -> None:
    # undecodable input bytes were carried through as surrogates
    data = output.encode(utils.ENCODING, utils.ENCODING_ERRORS)
    if data:
        data += b"\n"
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def main(argv: list[str] | None = None) -> int:
    """Parse command-line arguments and run the extraction."""
    args = build_parser().parse_args(argv)

    bbl_files = args.bbl or helpers.collect_all_bbl_files()
    if not bbl_files:
        _error("no .bbl files given or found in the current directory")
        return 1
    exclude = [args.output] if args.output else []
    bib_files = args.bib or helpers.collect_all_bib_files(exclude=exclude)
    if not bib_files:
        _error("no .bib files given or found in the current directory")
        return 1

    try:
        result = extract_files(bbl_files, bib_files, args.output)
    except (ParseError, OSError) as exc:
        _error(str(exc))
        return 1

    if args.output is None:
        _print_output(result.output)

    if not args.quiet:
        for message in format_diagnostics(result.diagnostics):
            _warn(message)
        for line in validation.generate_summary(result):
            print(line, file=sys.stderr)
        if args.output is not None:
            print(f"Wrote {result.entry_count} entries to {args.output}", file=sys.stderr)

    check_issues: list[str] = []
    if args.check:
        check_issues = _run_checks(result.output, result.entries)
        if not args.quiet:
            for message in check_issues:
                _warn(message)

    if args.strict and (result.missing_keys or result.conflicting_keys or check_issues):
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
