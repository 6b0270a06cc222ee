"""Command-line entry point: load a customer file into PostgreSQL."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path

from clientes_loader.config import LoaderConfig
from clientes_loader.exceptions import ClientesLoaderError
from clientes_loader.logging import setup_logging
from clientes_loader.parsing import iter_records
from clientes_loader.pipeline import LoadPipeline, LoadResult
from clientes_loader.sinks import ConsoleSink, PostgresSink
from clientes_loader.sources import FixedWidthFileSource
from clientes_loader.validation import classify_document

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (flags override environment values)."""
    parser = argparse.ArgumentParser(
        description="Load a fixed-width customer purchase file into PostgreSQL"
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Input file (default: $INPUT_FILE or base_teste.txt)",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="Input file encoding (default: $INPUT_ENCODING or utf-8)",
    )
    parser.add_argument(
        "--postgres-url",
        type=str,
        default=None,
        help="PostgreSQL connection string (default: built from DB_* variables)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Connection attempts before giving up (default: 10)",
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=None,
        help="Seconds between connection attempts (default: 5)",
    )
    parser.add_argument(
        "--truncate",
        action="store_true",
        help="Empty the clientes table before loading",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default=None,
        help="Log format (default: $LOG_FORMAT or standard)",
    )

    dry_run_group = parser.add_argument_group("dry run")
    dry_run_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and validate the file without touching the database",
    )
    dry_run_group.add_argument(
        "--max-records",
        type=int,
        default=10,
        help="Records to print in dry-run mode (default: 10, 0 for all)",
    )
    dry_run_group.add_argument(
        "--pretty",
        action="store_true",
        help="Indent printed records in dry-run mode",
    )
    return parser


def apply_overrides(config: LoaderConfig, args: argparse.Namespace) -> LoaderConfig:
    """Apply command-line flags on top of the environment config."""
    if args.input is not None:
        config.input_path = args.input
    if args.encoding is not None:
        config.encoding = args.encoding
    if args.retries is not None:
        config.retry.attempts = max(1, args.retries)
    if args.retry_delay is not None:
        config.retry.delay_seconds = max(0.0, args.retry_delay)
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format
    return config


def load(config: LoaderConfig, postgres_url: str | None = None, truncate: bool = False) -> LoadResult:
    """Connect, create the table and load the input file.

    Parameters
    ----------
    config : LoaderConfig
        Loader configuration.
    postgres_url : str | None
        Connection string overriding ``config.postgres``.
    truncate : bool
        Empty the table before loading.

    Returns
    -------
    LoadResult
        Result of the committed load.

    Raises
    ------
    ClientesLoaderError
        On any fatal condition; nothing is committed.
    """
    connection_string = postgres_url or config.postgres.connection_string
    sink = PostgresSink.connect_with_retry(
        connection_string,
        attempts=config.retry.attempts,
        delay_seconds=config.retry.delay_seconds,
    )
    try:
        print("Connected to the database successfully!")
        sink.create_tables()
        if truncate:
            sink.truncate_tables()

        source = FixedWidthFileSource(config.input_path, encoding=config.encoding)
        with source.open() as lines:
            return LoadPipeline(sink, encoding=source.encoding).run(lines)
    finally:
        sink.close()


def dry_run(config: LoaderConfig, max_records: int = 10, pretty: bool = False) -> dict[str, int]:
    """Parse and validate the input file, printing records instead of loading.

    Returns
    -------
    dict[str, int]
        Counts of records, valid documents and document types.
    """
    console = ConsoleSink(pretty=pretty, max_records=max_records or None)
    source = FixedWidthFileSource(config.input_path, encoding=config.encoding)

    with source.open() as lines:
        records = [record for _, record in iter_records(lines, encoding=source.encoding)]

    kinds = Counter(classify_document(r.document).value for r in records)
    summary = {
        "records": len(records),
        "valid_documents": sum(r.document_valid for r in records),
        "valid_store_documents": sum(r.store_document_valid for r in records),
        "null_purchase_dates": sum(r.last_purchase_date is None for r in records),
        **{f"type_{kind.lower()}": count for kind, count in sorted(kinds.items())},
    }

    console.write_batch("clientes", records)
    console.write_summary("Dry Run Summary", summary)
    return summary


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns
    -------
    int
        Process exit status: 0 after a successful commit, 1 on any
        fatal error.
    """
    args = build_parser().parse_args(argv)

    try:
        config = apply_overrides(LoaderConfig.from_env(), args)
    except ClientesLoaderError as e:
        setup_logging()
        logger.error("%s", e)
        return EXIT_FATAL

    setup_logging(level=config.log_level, format_type=config.log_format)

    logger.info("=" * 60)
    logger.info("clientes-loader - %s", "DRY RUN" if args.dry_run else "Load to PostgreSQL")
    logger.info("=" * 60)
    logger.info("Input: %s (%s)", config.input_path, config.encoding)
    if not args.dry_run:
        logger.info("PostgreSQL: %s:%s/%s", config.postgres.host, config.postgres.port, config.postgres.database)
        logger.info("Connect retries: %d x %.0fs", config.retry.attempts, config.retry.delay_seconds)
    logger.info("=" * 60)

    try:
        if args.dry_run:
            dry_run(config, max_records=args.max_records, pretty=args.pretty)
            return EXIT_OK

        result = load(config, postgres_url=args.postgres_url, truncate=args.truncate)
    except ClientesLoaderError as e:
        logger.error("%s", e)
        return EXIT_FATAL

    if result.invalid_documents:
        logger.info("%d rows have an invalid CPF/CNPJ", result.invalid_documents)
    print(f"Data loaded successfully: {result.rows_loaded} rows")
    return EXIT_OK
