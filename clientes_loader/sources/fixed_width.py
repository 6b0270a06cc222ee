"""Fixed-width file source."""

import codecs
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from clientes_loader.exceptions import SourceError

logger = logging.getLogger(__name__)


class FixedWidthFileSource:
    """Read the customer purchase file line by line.

    Lines are yielded as raw bytes: the layout is defined in byte
    offsets, and fields are decoded one by one with ``encoding`` by the
    parser.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        """Initialize the file source.

        Parameters
        ----------
        path : str | Path
            Input file path.
        encoding : str
            Text encoding of the file.
        """
        self.path = Path(path)
        self.encoding = encoding

    @contextmanager
    def open(self) -> Iterator[Iterator[bytes]]:
        """Open the file and yield an iterator over its lines.

        The file handle is closed when the block exits, whatever the
        outcome.

        Raises
        ------
        SourceError
            If the file cannot be opened or the encoding is unknown.
        """
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise SourceError(f"Unknown encoding {self.encoding!r} for {self.path}") from e

        try:
            handle = open(self.path, "rb")
        except OSError as e:
            raise SourceError(f"Cannot open {self.path}: {e}") from e

        logger.info("Reading %s (%s)", self.path, self.encoding)
        try:
            yield self.read_lines(handle)
        finally:
            handle.close()

    def read_lines(self, handle: BinaryIO) -> Iterator[bytes]:
        """Yield lines without their terminators.

        Raises
        ------
        SourceError
            If the file cannot be read.
        """
        try:
            for line in handle:
                yield line.rstrip(b"\r\n")
        except OSError as e:
            raise SourceError(f"Cannot read {self.path}: {e}") from e
