"""Enumeration types for clientes-loader."""

from enum import Enum


class DocumentType(str, Enum):
    CPF = "CPF"
    CNPJ = "CNPJ"
    UNKNOWN = "UNKNOWN"


class LoadState(str, Enum):
    IDLE = "IDLE"
    TRANSACTION_OPEN = "TRANSACTION_OPEN"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"
