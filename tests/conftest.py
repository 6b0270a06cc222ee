"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterator

import psycopg
import pytest


def pad(value: str, width: int) -> str:
    """Right-pad ``value`` with spaces to ``width`` UTF-8 bytes."""
    return value + " " * (width - len(value.encode("utf-8")))


def make_line(
    document: str = "529.982.247-25",
    private: str = "0",
    incomplete: str = "0",
    last_purchase_date: str = "2023-05-17",
    average_ticket: str = "1234,56",
    last_purchase_ticket: str = "99,90",
    most_frequent_store: str = "79.379.491/0008-50",
    last_purchase_store: str = "11.222.333/0001-81",
) -> str:
    """Build one fixed-width line by hand (independent of the generator).

    Fields are padded to their width in UTF-8 bytes, like the real files.
    """
    return (
        pad(document, 19)
        + pad(private, 12)
        + pad(incomplete, 12)
        + pad(last_purchase_date, 22)
        + pad(average_ticket, 22)
        + pad(last_purchase_ticket, 24)
        + pad(most_frequent_store, 19)
        + last_purchase_store
    )


HEADER = make_line(
    "CPF",
    "PRIVATE",
    "INCOMPLETO",
    "DATA DA ÚLTIMA COMPRA",
    "TICKET MÉDIO",
    "TICKET DA ÚLTIMA COMPRA",
    "LOJA MAIS FREQUÊNTE",
    "LOJA DA ÚLTIMA COMPRA",
)


class FakeCursor:
    """Cursor double that stages rows on its connection."""

    def __init__(self, sink: FakeSink) -> None:
        self.sink = sink
        self.closed = False

    def __enter__(self) -> FakeCursor:
        return self

    def __exit__(self, *exc_info: Any) -> bool:
        self.closed = True
        return False

    def execute(self, query: str, params: Any = None, prepare: bool | None = None) -> None:
        self.sink.executed.append((query, params, prepare))
        if self.sink.fail_on_row is not None and len(self.sink.staged) + 1 == self.sink.fail_on_row:
            raise psycopg.errors.UniqueViolation("duplicate key value violates unique constraint")
        self.sink.staged.append(params)


class FakeSink:
    """In-memory stand-in for PostgresSink with transaction semantics.

    Rows passed to ``execute`` are staged and only become visible in
    ``committed`` after ``commit``; ``rollback`` discards them.
    """

    def __init__(self, fail_on_row: int | None = None, fail_commit: bool = False) -> None:
        self.fail_on_row = fail_on_row
        self.fail_commit = fail_commit
        self.executed: list[tuple[str, Any, bool | None]] = []
        self.staged: list[Any] = []
        self.committed: list[Any] = []
        self.cursors: list[FakeCursor] = []
        self.commits = 0
        self.rollbacks = 0
        self.tables_created = False
        self.truncated = False
        self.closed = False

    def cursor(self) -> FakeCursor:
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def commit(self) -> None:
        if self.fail_commit:
            raise psycopg.OperationalError("server closed the connection unexpectedly")
        self.commits += 1
        self.committed.extend(self.staged)
        self.staged = []

    def rollback(self) -> None:
        self.rollbacks += 1
        self.staged = []

    def create_tables(self) -> None:
        self.tables_created = True

    def truncate_tables(self) -> None:
        self.truncated = True

    def close(self) -> None:
        self.closed = True
        self.staged = []


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo setup_logging() side effects between tests."""
    root = logging.getLogger()
    package = logging.getLogger("clientes_loader")
    root_level, package_level = root.level, package.level
    handlers = root.handlers[:]
    yield
    root.setLevel(root_level)
    package.setLevel(package_level)
    root.handlers[:] = handlers


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def line_factory() -> Callable[..., str]:
    """Factory for fixed-width data lines."""
    return make_line


@pytest.fixture
def fake_sink() -> FakeSink:
    """Fresh in-memory sink."""
    return FakeSink()


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """Header plus one well-formed data row."""
    path = tmp_path / "base_teste.txt"
    path.write_text(HEADER + "\n" + make_line() + "\n", encoding="utf-8")
    return path
