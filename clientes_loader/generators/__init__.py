"""Synthetic input file generators."""

from clientes_loader.generators.base import BaseGenerator
from clientes_loader.generators.sample_file import SampleFileGenerator, format_line

__all__ = ["BaseGenerator", "SampleFileGenerator", "format_line"]
