"""Tests for loading files into a line sequence."""

from pathlib import Path

import pytest

import bonpad
from bonpad.errors import SourceLoadError
from bonpad.io.reader import load, load_bytes, load_lines


class TestLoadLines:

    def test_strips_line_terminators(self, tmp_path: Path) -> None:
        path = tmp_path / "mixed.txt"
        path.write_bytes(b"one\r\ntwo\n\nthree")
        assert load_lines(path) == (b"one", b"two", b"", b"three")

    def test_strips_repeated_carriage_returns(self, tmp_path: Path) -> None:
        path = tmp_path / "crcr.txt"
        path.write_bytes(b"dos\r\r\n")
        assert load_lines(path) == (b"dos",)

    def test_reads_every_line(self, tmp_path: Path) -> None:
        path = tmp_path / "many.txt"
        path.write_bytes(b"".join(b"row %d\n" % i for i in range(500)))
        lines = load_lines(path)
        assert len(lines) == 500
        assert lines[-1] == b"row 499"

    def test_keeps_raw_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"caf\xe9\tend\n")
        assert load_lines(path) == (b"caf\xe9\tend",)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        assert load_lines(path) == ()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceLoadError) as info:
            load_lines(tmp_path / "nope.txt")
        assert info.value.operation == "open"
        assert "nope.txt" in str(info.value)

    def test_directory_is_an_error(self, tmp_path: Path) -> None:
        with pytest.raises(SourceLoadError):
            load_lines(tmp_path)


class TestLoadDocument:

    def test_load_sets_source_path(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.txt"
        path.write_text("alpha\nbeta\n")
        doc = load(path)
        assert doc.source_path == path
        assert doc.line_count == 2
        assert doc.line_length(1) == 4
        assert doc.line_length(2) == 0

    def test_package_level_load(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.txt"
        path.write_text("x\n")
        assert bonpad.load(str(path)).lines == (b"x",)

    def test_load_bytes(self) -> None:
        doc = load_bytes(b"a\r\nb")
        assert doc.lines == (b"a", b"b")
        assert doc.source_path is None

    def test_empty_document(self) -> None:
        doc = bonpad.TextDocument.empty()
        assert doc.is_empty
        assert doc.line(0) == b""
