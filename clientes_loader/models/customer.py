"""Customer purchase record models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any


@dataclass
class RawRecord:
    """Trimmed fields sliced from one fixed-width line.

    Flags are already resolved to booleans; everything else is the raw
    text exactly as found in the file (minus surrounding whitespace).
    """

    document: str
    is_private: bool
    is_incomplete: bool
    last_purchase_date: str
    average_ticket: str
    last_purchase_ticket: str
    most_frequent_store: str
    last_purchase_store: str
    line_number: int | None = None


@dataclass
class CustomerRecord:
    """Customer entity persisted to the ``clientes`` table."""

    document: str
    is_private: bool
    is_incomplete: bool
    last_purchase_date: date | None
    average_ticket: Decimal | None
    last_purchase_ticket: Decimal | None
    most_frequent_store: str
    last_purchase_store: str
    document_valid: bool
    # Checksum result over both store fields (see DESIGN.md)
    store_document_valid: bool

    def to_row(self) -> tuple[Any, ...]:
        """Return values in insert-statement bind order."""
        return (
            self.document,
            self.is_private,
            self.is_incomplete,
            self.last_purchase_date,
            self.average_ticket,
            self.last_purchase_ticket,
            self.most_frequent_store,
            self.last_purchase_store,
            self.document_valid,
            self.store_document_valid,
        )
