from pathlib import Path

import pytest

from bibextract.core import Diagnostic, ParseError
from bibextract.extract import (
    extract,
    extract_files,
    format_diagnostics,
    write_output,
)

from conftest import SAMPLE_BBL, SAMPLE_BIB


def test_end_to_end_example():
    result = extract([r"\bibitem{a} \bibitem{b}"], ["@x{a, f=1}\n@y{b, g=2}"])
    assert result.output == "@x{a, f=1}\n\n@y{b, g=2}"
    assert result.diagnostics == ()
    assert result.required_keys == ("a", "b")
    assert result.entry_count == 2


def test_missing_key_with_empty_database():
    result = extract([r"\bibitem{foo}"], [""])
    assert result.output == ""
    assert result.diagnostics == (Diagnostic.missing_key("foo"),)
    assert result.missing_keys == ["foo"]


def test_missing_key_leaves_no_gap():
    result = extract([r"\bibitem{a}\bibitem{b}\bibitem{c}"], ["@x{a,1}@x{c,3}"])
    assert result.output == "@x{a,1}\n\n@x{c,3}"
    assert result.missing_keys == ["b"]


def test_conflicting_duplicate_keeps_last_entry():
    result = extract([r"\bibitem{a}"], ["@x{a,1}@y{a,2}"])
    assert result.output == "@y{a,2}"
    assert result.diagnostics == (Diagnostic.duplicate_conflicting("a"),)
    assert result.conflicting_keys == ["a"]


def test_identical_duplicate_across_databases():
    result = extract([r"\bibitem{a}"], ["@x{a,1}", "noise @x{a,1}"])
    assert result.output == "@x{a,1}"
    assert result.diagnostics == (Diagnostic.duplicate_identical("a"),)
    assert result.duplicate_keys == ["a"]
    assert result.conflicting_keys == []


def test_duplicate_diagnostics_come_before_missing_keys():
    result = extract([r"\bibitem{m}\bibitem{a}"], ["@x{a,1}@x{a,2}"])
    assert [str(d) for d in result.diagnostics] == [
        "nonidentical entries for key a",
        "no entry for key m",
    ]


def test_output_sorted_and_deduplicated_across_bbl_texts():
    bbls = [r"\bibitem{knuth1984}\bibitem{gamma_design_1995}", SAMPLE_BBL]
    result = extract(bbls, [SAMPLE_BIB])
    keys = [block.split("{", 1)[1].split(",", 1)[0] for block in result.output.split("\n\n@")]
    assert keys == ["gamma_design_1995", "knuth1984"]
    assert "unused2001" not in result.output
    assert not result.output.startswith("\n") and not result.output.endswith("\n")


def test_single_strings_are_accepted():
    assert extract(r"\bibitem{a}", "@x{a,1}").output == "@x{a,1}"


def test_extraction_is_idempotent():
    first = extract([SAMPLE_BBL], [SAMPLE_BIB, "@x{knuth1984,other}"])
    second = extract([SAMPLE_BBL], [SAMPLE_BIB, "@x{knuth1984,other}"])
    assert first == second


def test_parse_error_aborts_extraction():
    with pytest.raises(ParseError):
        extract([r"\bibitem{a}"], ["@x{a,1}", "@broken"])


def test_extract_files_writes_output(project):
    out = project / "paper.bib"
    result = extract_files("paper.bbl", ["refs.bib"], out)
    assert out.read_text() == result.output
    assert result.output.startswith("@book{gamma_design_1995,")
    assert result.diagnostics == ()


def test_extract_files_without_destination(project):
    result = extract_files(["paper.bbl"], "refs.bib", "")
    assert result.entry_count == 2
    assert sorted(p.name for p in project.iterdir()) == ["paper.bbl", "refs.bib"]


def test_extract_files_empty_path_writes_nothing(project):
    result = extract_files("paper.bbl", "refs.bib", Path(""))
    assert result.entry_count == 2
    assert sorted(p.name for p in project.iterdir()) == ["paper.bbl", "refs.bib"]


def test_extract_files_returns_every_scanned_entry(project):
    result = extract_files("paper.bbl", "refs.bib")
    assert [e.key for e in result.entries] == ["knuth1984", "gamma_design_1995", "unused2001"]
    assert {e.source for e in result.entries} == {"refs.bib"}


def test_extract_files_names_broken_file(project):
    (project / "broken.bib").write_text("@article{oops}")
    out = project / "out.bib"
    with pytest.raises(ParseError) as excinfo:
        extract_files("paper.bbl", ["refs.bib", "broken.bib"], out)
    assert excinfo.value.source.endswith("broken.bib")
    assert "broken.bib" in str(excinfo.value)
    assert not out.exists()


def test_extract_files_keeps_undecodable_bytes(tmp_path):
    raw = b"@x{a, title={caf\xe9}}"
    (tmp_path / "a.bbl").write_text(r"\bibitem{a}")
    (tmp_path / "latin1.bib").write_bytes(raw)
    out = tmp_path / "out.bib"
    extract_files(tmp_path / "a.bbl", tmp_path / "latin1.bib", out)
    assert out.read_bytes() == raw


def test_write_output_closes_file_on_failure(monkeypatch, tmp_path):
    handles = []
    real_open = open

    class FailingWriter:
        def __init__(self, *args, **kwargs):
            self.handle = real_open(*args, **kwargs)
            handles.append(self.handle)

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            self.handle.close()
            return False

        def write(self, text):
            raise OSError("disk full")

    monkeypatch.setattr("builtins.open", FailingWriter)
    with pytest.raises(OSError, match="disk full"):
        write_output("@x{a,1}", tmp_path / "out.bib")
    assert handles and all(h.closed for h in handles)


def test_format_diagnostics():
    identical = [Diagnostic.duplicate_identical("a")]
    assert format_diagnostics(identical) == [
        "duplicate entries with identical content for key a",
        "duplicate entries, but identical content",
    ]
    mixed = identical + [Diagnostic.duplicate_conflicting("b"), Diagnostic.missing_key("c")]
    assert format_diagnostics(mixed) == [
        "duplicate entries with identical content for key a",
        "nonidentical entries for key b",
        "no entry for key c",
    ]
    assert format_diagnostics([]) == []
