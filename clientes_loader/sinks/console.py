"""Console sink for dry runs and debugging."""

import json
from typing import Any, TextIO

from clientes_loader.sinks.serialization import to_dict


class ConsoleSink:
    """Output records to console (stdout) instead of the database."""

    def __init__(
        self,
        pretty: bool = False,
        max_records: int | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        stream : TextIO | None
            Output stream (defaults to stdout).
        """
        self.pretty = pretty
        self.max_records = max_records
        self.stream = stream

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to console."""
        self._print(f"\n{'='*60}")
        self._print(f"Entity: {entity_type} ({len(records)} records)")
        self._print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records

        for record in display_records:
            data = to_dict(record)
            if self.pretty:
                self._print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
            else:
                self._print(json.dumps(data, ensure_ascii=False, default=str))

        if self.max_records and len(records) > self.max_records:
            self._print(f"... and {len(records) - self.max_records} more records")

    def write_summary(self, title: str, values: dict[str, Any]) -> None:
        """Print a titled key/value block."""
        self._print(f"\n{'='*60}")
        self._print(title)
        self._print("=" * 60)
        for key, value in values.items():
            self._print(f"  {key}: {value}")

    def _print(self, text: str) -> None:
        print(text, file=self.stream)
