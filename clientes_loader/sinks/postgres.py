"""PostgreSQL sink for the ``clientes`` table."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import psycopg

from clientes_loader.exceptions import DatabaseUnavailableError, SchemaError

logger = logging.getLogger(__name__)

TABLE_NAME = "clientes"

TABLE_COLUMNS = [
    "cpf",
    "private",
    "incompleto",
    "data_ultima_compra",
    "ticket_medio",
    "ticket_ultima_compra",
    "loja_mais_frequente",
    "loja_ultima_compra",
    "cpf_valido",
    "cnpj_valido",
]

CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id SERIAL PRIMARY KEY,
    cpf TEXT,
    private BOOLEAN,
    incompleto BOOLEAN,
    data_ultima_compra DATE,
    ticket_medio NUMERIC,
    ticket_ultima_compra NUMERIC,
    loja_mais_frequente TEXT,
    loja_ultima_compra TEXT,
    cpf_valido BOOLEAN,
    cnpj_valido BOOLEAN
)
"""

INSERT_SQL = (
    f"INSERT INTO {TABLE_NAME} ({', '.join(TABLE_COLUMNS)}) "
    f"VALUES ({', '.join(['%s'] * len(TABLE_COLUMNS))})"
)


class PostgresSink:
    """Connection provider for the loader.

    Holds one psycopg connection in non-autocommit mode, so every
    statement runs inside a transaction that is only made durable by
    :meth:`commit`.
    """

    def __init__(self, connection_string: str) -> None:
        """Initialize PostgreSQL sink.

        Parameters
        ----------
        connection_string : str
            PostgreSQL connection string.
        """
        self.connection_string = connection_string
        self.conn = psycopg.connect(connection_string)

    @classmethod
    def connect_with_retry(
        cls,
        connection_string: str,
        attempts: int = 10,
        delay_seconds: float = 5.0,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> PostgresSink:
        """Connect and ping, retrying while the server is not ready.

        Parameters
        ----------
        connection_string : str
            PostgreSQL connection string.
        attempts : int
            Maximum number of connection attempts.
        delay_seconds : float
            Fixed wait between attempts.
        sleep : Callable[[float], Any]
            Sleep function (injectable for tests).

        Returns
        -------
        PostgresSink
            A connected, responsive sink.

        Raises
        ------
        DatabaseUnavailableError
            If every attempt fails.
        """
        last_error: psycopg.Error | None = None
        for attempt in range(1, attempts + 1):
            sink = None
            try:
                sink = cls(connection_string)
                sink.ping()
                return sink
            except psycopg.OperationalError as e:
                last_error = e
                if sink is not None:
                    sink.close()
                logger.warning(
                    "Attempt %d/%d: PostgreSQL is not ready (%s)",
                    attempt, attempts, str(e).strip() or type(e).__name__,
                    extra={"attempt": attempt},
                )
                if attempt < attempts:
                    sleep(delay_seconds)

        raise DatabaseUnavailableError(
            f"Could not connect to PostgreSQL after {attempts} attempts: {last_error}"
        ) from last_error

    def ping(self) -> None:
        """Run a trivial query to check the server answers."""
        self.conn.execute("SELECT 1")
        self.conn.rollback()

    def create_tables(self) -> None:
        """Create the target table if it does not exist.

        Raises
        ------
        SchemaError
            If the DDL fails.
        """
        try:
            with self.conn.cursor() as cur:
                cur.execute(CREATE_TABLE_SQL)
            self.conn.commit()
        except psycopg.Error as e:
            self.conn.rollback()
            raise SchemaError(f"Could not create table {TABLE_NAME}: {e}") from e
        logger.debug("Table %s ready", TABLE_NAME)

    def truncate_tables(self) -> None:
        """Remove every row from the target table.

        Runs inside the current transaction, so it only takes effect
        together with the next :meth:`commit`.
        """
        with self.conn.cursor() as cur:
            cur.execute(f"TRUNCATE {TABLE_NAME} RESTART IDENTITY")
        logger.info("Truncated %s (pending commit)", TABLE_NAME)

    def cursor(self) -> Any:
        """Open a cursor inside the current transaction."""
        return self.conn.cursor()

    def commit(self) -> None:
        """Commit the current transaction."""
        self.conn.commit()

    def rollback(self) -> None:
        """Roll back the current transaction."""
        self.conn.rollback()

    def close(self) -> None:
        """Close the connection; uncommitted work is discarded."""
        self.conn.close()
