"""Fixed-width record layout of the customer purchase file.

Offsets are byte offsets into the encoded line, so a multi-byte
character in one field never shifts the fields after it.
"""

from dataclasses import dataclass

from clientes_loader.exceptions import OutOfRangeError, SourceError
from clientes_loader.models import RawRecord
from clientes_loader.parsing.coercion import coerce_flag

DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class FieldSpec:
    """Byte slice of the layout (0-based, end-exclusive)."""

    name: str
    start: int
    end: int | None = None  # None runs to end of line

    def extract(self, line: bytes, encoding: str = DEFAULT_ENCODING) -> str:
        """Slice this field from ``line``, decode it and trim it.

        Raises
        ------
        UnicodeDecodeError
            If the slice is not valid in ``encoding``.
        """
        return line[self.start : self.end].decode(encoding).strip()


RECORD_LAYOUT: tuple[FieldSpec, ...] = (
    FieldSpec("document", 0, 18),
    FieldSpec("private_flag", 19, 30),
    FieldSpec("incomplete_flag", 31, 42),
    FieldSpec("last_purchase_date", 43, 64),
    FieldSpec("average_ticket", 65, 86),
    FieldSpec("last_purchase_ticket", 87, 110),
    FieldSpec("most_frequent_store", 111, 130),
    FieldSpec("last_purchase_store", 130),
)

# In bytes
MIN_LINE_WIDTH = 131

_FIELDS = {spec.name: spec for spec in RECORD_LAYOUT}


def parse_line(
    line: bytes | str,
    line_number: int | None = None,
    encoding: str = DEFAULT_ENCODING,
) -> RawRecord:
    """Split one fixed-width line into its raw fields.

    Parameters
    ----------
    line : bytes | str
        Raw line bytes; text is encoded with ``encoding`` first. A
        trailing line terminator is ignored.
    line_number : int | None
        1-based position in the file, for error reporting.
    encoding : str
        Encoding of the file the line was read from.

    Returns
    -------
    RawRecord
        Trimmed fields with flags resolved to booleans.

    Raises
    ------
    OutOfRangeError
        If the line is shorter than ``MIN_LINE_WIDTH`` bytes.
    SourceError
        If a field is not valid in ``encoding``.
    """
    if isinstance(line, str):
        line = line.encode(encoding)
    line = line.rstrip(b"\r\n")

    where = f"line {line_number}" if line_number is not None else "line"
    if len(line) < MIN_LINE_WIDTH:
        raise OutOfRangeError(
            f"{where} has {len(line)} bytes, layout needs at least {MIN_LINE_WIDTH}",
            line_number=line_number,
            width=len(line),
        )

    values = {}
    for name, spec in _FIELDS.items():
        try:
            values[name] = spec.extract(line, encoding)
        except UnicodeDecodeError as e:
            raise SourceError(f"{where} field {name} is not valid {encoding}: {e}") from e

    return RawRecord(
        document=values["document"],
        is_private=coerce_flag(values["private_flag"]),
        is_incomplete=coerce_flag(values["incomplete_flag"]),
        last_purchase_date=values["last_purchase_date"],
        average_ticket=values["average_ticket"],
        last_purchase_ticket=values["last_purchase_ticket"],
        most_frequent_store=values["most_frequent_store"],
        last_purchase_store=values["last_purchase_store"],
        line_number=line_number,
    )
