"""Fixed-width parsing and field coercion."""

from clientes_loader.parsing.coercion import coerce_date, coerce_decimal, coerce_flag
from clientes_loader.parsing.layout import MIN_LINE_WIDTH, RECORD_LAYOUT, FieldSpec, parse_line
from clientes_loader.parsing.records import build_record, iter_records

__all__ = [
    "MIN_LINE_WIDTH",
    "RECORD_LAYOUT",
    "FieldSpec",
    "build_record",
    "coerce_date",
    "coerce_decimal",
    "coerce_flag",
    "iter_records",
    "parse_line",
]
