from bibextract.utils import join_entries, read_text, unique_sorted, write_text


def test_version():
    import bibextract

    assert hasattr(bibextract, "__version__")
    assert isinstance(bibextract.__version__, str)


def test_unique_sorted_uses_code_point_order():
    assert unique_sorted(["b", "a", "B", "a", "_x", "10", "9"]) == ["10", "9", "B", "_x", "a", "b"]
    assert unique_sorted([]) == []


def test_join_entries():
    assert join_entries([]) == ""
    assert join_entries(["one"]) == "one"
    assert join_entries(["one", "two", "three"]) == "one\n\ntwo\n\nthree"


def test_read_write_round_trip_preserves_line_endings(tmp_path):
    path = tmp_path / "crlf.bib"
    write_text(path, "@x{a,\r\n 1}\r\n")
    assert path.read_bytes() == b"@x{a,\r\n 1}\r\n"
    assert read_text(path) == "@x{a,\r\n 1}\r\n"
