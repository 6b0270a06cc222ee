"""Output sinks for loaded records."""

from clientes_loader.sinks.console import ConsoleSink
from clientes_loader.sinks.postgres import PostgresSink

__all__ = ["ConsoleSink", "PostgresSink"]
