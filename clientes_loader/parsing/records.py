"""Assemble validated customer records from raw lines."""

from typing import Iterable, Iterator

from clientes_loader.models import CustomerRecord, RawRecord
from clientes_loader.parsing.coercion import coerce_date, coerce_decimal
from clientes_loader.parsing.layout import DEFAULT_ENCODING, parse_line
from clientes_loader.validation import is_valid_document, normalize_text


def build_record(raw: RawRecord) -> CustomerRecord:
    """Normalize, validate and coerce a raw record."""
    document = normalize_text(raw.document)
    most_frequent_store = normalize_text(raw.most_frequent_store)
    last_purchase_store = normalize_text(raw.last_purchase_store)

    return CustomerRecord(
        document=document,
        is_private=raw.is_private,
        is_incomplete=raw.is_incomplete,
        last_purchase_date=coerce_date(raw.last_purchase_date, "data_ultima_compra", raw.line_number),
        average_ticket=coerce_decimal(raw.average_ticket, "ticket_medio", raw.line_number),
        last_purchase_ticket=coerce_decimal(
            raw.last_purchase_ticket, "ticket_ultima_compra", raw.line_number
        ),
        most_frequent_store=most_frequent_store,
        last_purchase_store=last_purchase_store,
        document_valid=is_valid_document(document),
        store_document_valid=(
            is_valid_document(most_frequent_store) and is_valid_document(last_purchase_store)
        ),
    )


def iter_records(
    lines: Iterable[bytes | str],
    skip_header: bool = True,
    encoding: str = DEFAULT_ENCODING,
) -> Iterator[tuple[int, CustomerRecord]]:
    """Yield ``(line_number, record)`` for each data line.

    Parameters
    ----------
    lines : Iterable[bytes | str]
        File lines, header included.
    skip_header : bool
        Drop the first line without looking at it.
    encoding : str
        Encoding of the file.

    Yields
    ------
    tuple[int, CustomerRecord]
        1-based line number and the assembled record.
    """
    for line_number, line in enumerate(lines, start=1):
        if skip_header and line_number == 1:
            continue
        yield line_number, build_record(parse_line(line, line_number, encoding))
