"""Tests for the fixed-width file source."""

from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import HEADER, make_line

from clientes_loader.exceptions import SourceError
from clientes_loader.parsing import iter_records
from clientes_loader.sources import FixedWidthFileSource


class TestFixedWidthFileSource:
    """Tests for FixedWidthFileSource."""

    def test_reads_lines_without_terminators(self, tmp_path: Path) -> None:
        path = tmp_path / "input.txt"
        path.write_bytes((HEADER + "\r\n" + make_line() + "\n").encode("utf-8"))

        with FixedWidthFileSource(path).open() as lines:
            result = list(lines)

        assert result == [HEADER.encode("utf-8"), make_line().encode("utf-8")]

    def test_lines_are_undecoded_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "input.txt"
        path.write_text("LOJA SÃO JOÃO\n", encoding="utf-8")

        with FixedWidthFileSource(path).open() as lines:
            assert list(lines) == ["LOJA SÃO JOÃO".encode("utf-8")]

    def test_accented_store_read_end_to_end(self, tmp_path: Path) -> None:
        """Byte-padded accented fields keep the following offsets."""
        path = tmp_path / "input.txt"
        row = make_line(most_frequent_store="LOJA SÃO JOÃO", last_purchase_store="CENTRO")
        path.write_text(HEADER + "\n" + row + "\n", encoding="utf-8")
        source = FixedWidthFileSource(path)

        with source.open() as lines:
            records = [r for _, r in iter_records(lines, encoding=source.encoding)]

        assert records[0].most_frequent_store == "LOJA SAO JOAO"
        assert records[0].last_purchase_store == "CENTRO"

    def test_latin1_file(self, tmp_path: Path) -> None:
        path = tmp_path / "input.txt"
        path.write_bytes((HEADER + "\n").encode("utf-8") + make_line(last_purchase_store="AÇAÍ").encode("latin-1"))
        source = FixedWidthFileSource(path, encoding="latin-1")

        with source.open() as lines:
            records = [r for _, r in iter_records(lines, encoding=source.encoding)]

        assert records[0].last_purchase_store == "ACAI"

    def test_missing_file(self, tmp_path: Path) -> None:
        source = FixedWidthFileSource(tmp_path / "missing.txt")

        with pytest.raises(SourceError) as exc_info:
            with source.open():
                pass

        assert "missing.txt" in str(exc_info.value)

    def test_unknown_encoding(self, tmp_path: Path) -> None:
        path = tmp_path / "input.txt"
        path.write_text("x\n", encoding="utf-8")

        with pytest.raises(SourceError) as exc_info:
            with FixedWidthFileSource(path, encoding="no-such-codec").open():
                pass

        assert "no-such-codec" in str(exc_info.value)

    def test_invalid_bytes_fail_when_parsed(self, tmp_path: Path) -> None:
        path = tmp_path / "input.txt"
        path.write_bytes(HEADER.encode("utf-8") + b"\n" + b"\xff" * 140 + b"\n")
        source = FixedWidthFileSource(path)

        with pytest.raises(SourceError):
            with source.open() as lines:
                list(iter_records(lines, encoding=source.encoding))

    def test_handle_closed_after_error(self, tmp_path: Path) -> None:
        path = tmp_path / "input.txt"
        path.write_text("a\nb\n", encoding="utf-8")
        source = FixedWidthFileSource(path)
        opened = []
        real_open = open

        def tracking_open(*args, **kwargs):
            handle = real_open(*args, **kwargs)
            opened.append(handle)
            return handle

        with patch("builtins.open", tracking_open):
            with pytest.raises(RuntimeError):
                with source.open() as lines:
                    next(lines)
                    raise RuntimeError("boom")

        assert len(opened) == 1
        assert opened[0].closed

    def test_carriage_return_inside_line_kept(self, tmp_path: Path) -> None:
        """Only newline splits records."""
        path = tmp_path / "input.txt"
        path.write_bytes(b"a\rb\n")

        with FixedWidthFileSource(path).open() as lines:
            assert list(lines) == [b"a\rb"]
