"""Input sources for clientes-loader."""

from clientes_loader.sources.fixed_width import FixedWidthFileSource

__all__ = ["FixedWidthFileSource"]
