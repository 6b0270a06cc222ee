"""Domain models for clientes-loader."""

from clientes_loader.models.customer import CustomerRecord, RawRecord
from clientes_loader.models.enums import DocumentType, LoadState

__all__ = ["CustomerRecord", "DocumentType", "LoadState", "RawRecord"]
