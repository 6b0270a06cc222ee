"""Generate fixed-width customer purchase files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from clientes_loader.generators.base import BaseGenerator
from clientes_loader.parsing.layout import DEFAULT_ENCODING, RECORD_LAYOUT

logger = logging.getLogger(__name__)

HEADER_LABELS = (
    "CPF",
    "PRIVATE",
    "INCOMPLETO",
    "DATA DA ÚLTIMA COMPRA",
    "TICKET MÉDIO",
    "TICKET DA ÚLTIMA COMPRA",
    "LOJA MAIS FREQUÊNTE",
    "LOJA DA ÚLTIMA COMPRA",
)

# Byte padding up to the start of the next field; the last field is unpadded.
COLUMN_WIDTHS = tuple(
    nxt.start - cur.start for cur, nxt in zip(RECORD_LAYOUT, RECORD_LAYOUT[1:])
)


def _pad(value: str, width: int, encoding: str) -> str:
    return value + " " * (width - len(value.encode(encoding)))


def format_line(values: list[str] | tuple[str, ...], encoding: str = DEFAULT_ENCODING) -> str:
    """Pad values into one fixed-width line.

    Padding is counted in encoded bytes, matching the byte offsets the
    parser slices on.

    Parameters
    ----------
    values : list[str] | tuple[str, ...]
        One value per layout field, in layout order.
    encoding : str
        Encoding the line will be written with.

    Returns
    -------
    str
        The formatted line, without a terminator.

    Raises
    ------
    ValueError
        If the value count is wrong or a value overflows its field.
    """
    if len(values) != len(RECORD_LAYOUT):
        raise ValueError(f"Expected {len(RECORD_LAYOUT)} values, got {len(values)}")

    parts = []
    for spec, width, value in zip(RECORD_LAYOUT, COLUMN_WIDTHS, values):
        if len(value.encode(encoding)) > spec.end - spec.start:
            raise ValueError(f"Value {value!r} does not fit field {spec.name}")
        parts.append(_pad(value, width, encoding))
    parts.append(values[-1])
    return "".join(parts)


class SampleFileGenerator(BaseGenerator):
    """Generate synthetic customer purchase files in the loader's layout.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    invalid_document_rate : float
        Share of customers whose CPF gets a wrong check digit.
    null_rate : float
        Share of NULL values in date, ticket and store columns.
    """

    def __init__(
        self,
        seed: int | None = None,
        invalid_document_rate: float = 0.05,
        null_rate: float = 0.2,
    ) -> None:
        super().__init__(seed)
        self.invalid_document_rate = invalid_document_rate
        self.null_rate = null_rate

    def header(self) -> str:
        """Return the header line.

        Labels are padded but not width-checked: the header is never
        parsed, and some accented labels run one byte past their field.
        """
        padded = [_pad(label, width, DEFAULT_ENCODING) for label, width in zip(HEADER_LABELS, COLUMN_WIDTHS)]
        return "".join(padded) + HEADER_LABELS[-1]

    def generate(self) -> str:
        """Generate a single record line."""
        return format_line(self._values())

    def generate_lines(self, count: int) -> Iterator[str]:
        """Generate the header followed by ``count`` record lines.

        Yields
        ------
        str
            Lines without terminators.
        """
        yield self.header()
        for _ in range(count):
            yield self.generate()

    def write(self, path: str | Path, count: int) -> Path:
        """Write a complete sample file.

        Parameters
        ----------
        path : str | Path
            Output file path.
        count : int
            Number of record lines (header excluded).

        Returns
        -------
        Path
            The written file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            for line in self.generate_lines(count):
                f.write(line + "\n")
        logger.info("Wrote %d records to %s", count, path)
        return path

    def _values(self) -> list[str]:
        has_purchases = self.random.random() >= self.null_rate
        return [
            self._document(),
            self._flag(0.15),
            self._flag(0.3),
            self.fake.date_between(start_date="-3y", end_date="today").isoformat()
            if has_purchases
            else "NULL",
            self._ticket() if has_purchases else "NULL",
            self._ticket() if has_purchases else "NULL",
            self.fake.cnpj() if has_purchases else "NULL",
            self.fake.cnpj() if has_purchases else "NULL",
        ]

    def _document(self) -> str:
        cpf = self.fake.cpf()
        if self.random.random() < self.invalid_document_rate:
            wrong = (int(cpf[-1]) + 1) % 10
            cpf = f"{cpf[:-1]}{wrong}"
        return cpf

    def _flag(self, probability: float) -> str:
        return "1" if self.random.random() < probability else "0"

    def _ticket(self) -> str:
        # Log-normal spend, ~150 BRL median, written with a decimal comma
        return f"{self.random.lognormvariate(5.0, 0.8):.2f}".replace(".", ",")
