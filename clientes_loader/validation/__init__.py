"""Text normalization and document validation."""

from clientes_loader.validation.documents import (
    classify_document,
    cnpj_check_digits,
    cpf_check_digits,
    is_valid_cnpj,
    is_valid_cpf,
    is_valid_document,
    only_digits,
)
from clientes_loader.validation.text import normalize_text

__all__ = [
    "classify_document",
    "cnpj_check_digits",
    "cpf_check_digits",
    "is_valid_cnpj",
    "is_valid_cpf",
    "is_valid_document",
    "normalize_text",
    "only_digits",
]
