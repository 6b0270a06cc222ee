"""Tests for the sample file generator."""

from pathlib import Path

import pytest

from clientes_loader.generators import SampleFileGenerator, format_line
from clientes_loader.parsing import MIN_LINE_WIDTH, build_record, iter_records, parse_line
from clientes_loader.sources import FixedWidthFileSource


class TestFormatLine:
    """Tests for format_line."""

    def test_round_trips_through_parser(self) -> None:
        values = [
            "529.982.247-25",
            "1",
            "0",
            "2023-05-17",
            "10,00",
            "20,00",
            "79.379.491/0008-50",
            "11.222.333/0001-81",
        ]
        raw = parse_line(format_line(values))

        assert raw.document == values[0]
        assert raw.is_private is True
        assert raw.most_frequent_store == values[6]
        assert raw.last_purchase_store == values[7]

    def test_rejects_overflow(self) -> None:
        values = ["1" * 19, "0", "0", "NULL", "NULL", "NULL", "NULL", "NULL"]
        with pytest.raises(ValueError):
            format_line(values)

    def test_rejects_wrong_value_count(self) -> None:
        with pytest.raises(ValueError):
            format_line(["a", "b"])


class TestSampleFileGenerator:
    """Tests for SampleFileGenerator."""

    def test_header_is_skipped_by_parser(self, seed: int) -> None:
        gen = SampleFileGenerator(seed=seed)
        assert gen.header().startswith("CPF")
        assert len(gen.header().encode("utf-8")) >= MIN_LINE_WIDTH

    def test_lines_fit_layout(self, seed: int) -> None:
        gen = SampleFileGenerator(seed=seed)
        records = list(iter_records(gen.generate_lines(200)))

        assert len(records) == 200
        for _, record in records:
            assert record.document.count(".") == 2
            assert len(record.document) == 14

    def test_reproducible(self, seed: int) -> None:
        first = list(SampleFileGenerator(seed=seed).generate_lines(20))
        second = list(SampleFileGenerator(seed=seed).generate_lines(20))
        assert first == second

    def test_all_valid_documents(self, seed: int) -> None:
        gen = SampleFileGenerator(seed=seed, invalid_document_rate=0.0, null_rate=0.0)
        for _ in range(100):
            record = build_record(parse_line(gen.generate()))
            assert record.document_valid is True
            assert record.store_document_valid is True
            assert record.last_purchase_date is not None
            assert record.average_ticket is not None

    def test_all_invalid_documents(self, seed: int) -> None:
        gen = SampleFileGenerator(seed=seed, invalid_document_rate=1.0)
        for _ in range(100):
            assert build_record(parse_line(gen.generate())).document_valid is False

    def test_all_null_purchases(self, seed: int) -> None:
        gen = SampleFileGenerator(seed=seed, null_rate=1.0)
        for _ in range(50):
            record = build_record(parse_line(gen.generate()))
            assert record.last_purchase_date is None
            assert record.average_ticket is None
            assert record.last_purchase_ticket is None
            assert record.most_frequent_store == "NULL"
            assert record.store_document_valid is False

    def test_write(self, seed: int, tmp_path: Path) -> None:
        path = SampleFileGenerator(seed=seed).write(tmp_path / "out" / "base.txt", 25)

        with FixedWidthFileSource(path).open() as lines:
            all_lines = list(lines)

        assert len(all_lines) == 26
        assert len(list(iter_records(all_lines))) == 25
