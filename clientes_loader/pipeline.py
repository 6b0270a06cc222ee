"""All-or-nothing load of one customer file into PostgreSQL."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

import psycopg

from clientes_loader.exceptions import CommitError, LoadAbortedError, PipelineStateError
from clientes_loader.models import LoadState
from clientes_loader.parsing import build_record, parse_line
from clientes_loader.parsing.layout import DEFAULT_ENCODING
from clientes_loader.sinks.postgres import INSERT_SQL

if TYPE_CHECKING:
    from clientes_loader.sinks.postgres import PostgresSink

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of a committed load."""

    rows_loaded: int = 0
    lines_read: int = 0
    invalid_documents: int = 0
    invalid_store_documents: int = 0
    elapsed_seconds: float = 0.0

    @property
    def throughput(self) -> float:
        """Rows per second achieved."""
        return self.rows_loaded / self.elapsed_seconds if self.elapsed_seconds > 0 else 0.0


class LoadPipeline:
    """Load every data line of one file inside a single transaction.

    Lifecycle: ``IDLE -> TRANSACTION_OPEN -> COMMITTED | ROLLED_BACK``.
    The first line is a header and is skipped. Any failure on any row
    rolls back the whole file; a pipeline instance serves one file only.

    Parameters
    ----------
    sink : PostgresSink
        Connection provider with ``cursor``, ``commit`` and ``rollback``.
    progress_every : int
        Log progress every N rows (0 disables).
    encoding : str
        Encoding of the input file, used to decode each field.
    """

    def __init__(
        self,
        sink: PostgresSink,
        progress_every: int = 10000,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.sink = sink
        self.progress_every = progress_every
        self.encoding = encoding
        self.state = LoadState.IDLE
        self.result = LoadResult()

    def run(self, lines: Iterable[bytes | str]) -> LoadResult:
        """Insert all data lines and commit.

        Parameters
        ----------
        lines : Iterable[bytes | str]
            File lines, header included.

        Returns
        -------
        LoadResult
            Row counts and timing of the committed load.

        Raises
        ------
        PipelineStateError
            If the pipeline already ran.
        LoadAbortedError
            If a line cannot be parsed or inserted; nothing is committed.
        CommitError
            If the final commit fails; nothing is committed.
        """
        if self.state is not LoadState.IDLE:
            raise PipelineStateError(f"Pipeline already used (state={self.state.value})")

        t0 = time.perf_counter()
        self.state = LoadState.TRANSACTION_OPEN
        line_number = 0

        try:
            with self.sink.cursor() as cur:
                for line_number, line in enumerate(lines, start=1):
                    self.result.lines_read = line_number
                    if line_number == 1:
                        continue
                    self._insert(cur, line, line_number)
        except Exception as e:
            self._abort(line_number)
            raise LoadAbortedError(
                f"Load aborted at line {line_number}, transaction rolled back: {e}",
                line_number=line_number,
            ) from e
        except BaseException:
            self._abort(line_number)
            raise

        try:
            self.sink.commit()
        except psycopg.Error as e:
            self._abort()
            raise CommitError(f"Commit failed, transaction rolled back: {e}") from e
        except BaseException:
            self._abort()
            raise

        self.state = LoadState.COMMITTED
        self.result.elapsed_seconds = time.perf_counter() - t0
        logger.info(
            "Committed %d rows in %.1fs (%.0f rows/sec)",
            self.result.rows_loaded,
            self.result.elapsed_seconds,
            self.result.throughput,
        )
        return self.result

    def _insert(self, cur, line: bytes | str, line_number: int) -> None:
        record = build_record(parse_line(line, line_number, self.encoding))
        cur.execute(INSERT_SQL, record.to_row(), prepare=True)

        self.result.rows_loaded += 1
        if not record.document_valid:
            self.result.invalid_documents += 1
        if not record.store_document_valid:
            self.result.invalid_store_documents += 1

        if self.progress_every and self.result.rows_loaded % self.progress_every == 0:
            logger.info("  %d rows staged", self.result.rows_loaded)

    def _abort(self, line_number: int | None = None) -> None:
        """Roll back and move to the terminal failure state."""
        self.state = LoadState.ROLLED_BACK
        try:
            self.sink.rollback()
        except psycopg.Error as e:
            # Closing the connection still discards the transaction
            logger.error("Rollback failed: %s", e)
        logger.error(
            "Transaction rolled back, no rows were loaded",
            extra={"line_number": line_number},
        )
