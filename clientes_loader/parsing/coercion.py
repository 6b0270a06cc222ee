"""Typed coercion of raw fixed-width values.

Coercion never raises: a value that cannot be parsed becomes ``None`` and
a warning is logged, the record itself is kept.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATE_NULL_SENTINELS = frozenset({"", "NULL", "0"})
DECIMAL_NULL_SENTINELS = frozenset({"", "NULL", "NU"})

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def coerce_flag(raw: str) -> bool:
    """Return True only for the literal ``"1"``."""
    return raw == "1"


def _reject(field: str, raw: str, line_number: int | None) -> None:
    logger.warning(
        "Invalid %s %r, value will be stored as NULL",
        field,
        raw,
        extra={"field": field, "value": raw, "line_number": line_number},
    )


def coerce_date(raw: str, field: str = "date", line_number: int | None = None) -> date | None:
    """Parse a ``YYYY-MM-DD`` date, or return None.

    Parameters
    ----------
    raw : str
        Trimmed field value.
    field : str
        Field name used in the warning message.
    line_number : int | None
        Source line, attached to the warning.

    Returns
    -------
    date | None
        Parsed date, or None for null sentinels and malformed values.
    """
    if raw in DATE_NULL_SENTINELS:
        return None

    if _ISO_DATE.fullmatch(raw):
        try:
            return datetime.strptime(raw, DATE_FORMAT).date()
        except ValueError:
            pass

    _reject(field, raw, line_number)
    return None


def coerce_decimal(raw: str, field: str = "decimal", line_number: int | None = None) -> Decimal | None:
    """Parse a decimal that may use a comma separator, or return None.

    Accepts an optional sign, digits with one ``,`` or ``.`` separator
    and an exponent. Two forms that :class:`~decimal.Decimal` would
    otherwise take are refused and become NULL with a warning:

    * ``_`` digit grouping (``1_000``), which is not a number in the
      source files;
    * ``NaN`` and ``Infinity``, which are not ticket amounts even though
      PostgreSQL ``NUMERIC`` could store them.

    Parameters
    ----------
    raw : str
        Trimmed field value.
    field : str
        Field name used in the warning message.
    line_number : int | None
        Source line, attached to the warning.

    Returns
    -------
    Decimal | None
        Parsed value, or None for null sentinels and malformed values.
    """
    if raw in DECIMAL_NULL_SENTINELS:
        return None

    value = None
    if "_" not in raw:
        try:
            value = Decimal(raw.replace(",", "."))
        except InvalidOperation:
            value = None

    if value is None or not value.is_finite():
        _reject(field, raw, line_number)
        return None
    return value
