"""Brazilian tax-ID (CPF/CNPJ) checksum validation.

Both documents use mod-11 check digits: a weighted sum of the preceding
digits is reduced modulo 11, and the check digit is ``11 - remainder``
except when the remainder is below 2, in which case it is ``0``.
"""

from __future__ import annotations

import re

from clientes_loader.models.enums import DocumentType

CPF_LENGTH = 11
CNPJ_LENGTH = 14

CNPJ_WEIGHTS_FIRST = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_WEIGHTS_SECOND = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)

_NON_DIGITS = re.compile(r"\D")
_ASCII_DIGITS = frozenset("0123456789")


def only_digits(raw: str) -> str:
    """Remove every non-digit character from ``raw``."""
    return _NON_DIGITS.sub("", raw)


def _check_digit(digits: list[int], weights: tuple[int, ...] | range) -> int:
    remainder = sum(d * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def cpf_check_digits(base: str) -> str:
    """Compute the two CPF check digits for a 9-digit base.

    Parameters
    ----------
    base : str
        First nine digits of the CPF.

    Returns
    -------
    str
        The two check digits.
    """
    digits = [int(c) for c in base[:9]]
    first = _check_digit(digits, range(10, 1, -1))
    second = _check_digit(digits + [first], range(11, 1, -1))
    return f"{first}{second}"


def cnpj_check_digits(base: str) -> str:
    """Compute the two CNPJ check digits for a 12-digit base.

    Parameters
    ----------
    base : str
        First twelve digits of the CNPJ.

    Returns
    -------
    str
        The two check digits.
    """
    digits = [int(c) for c in base[:12]]
    first = _check_digit(digits, CNPJ_WEIGHTS_FIRST)
    second = _check_digit(digits + [first], CNPJ_WEIGHTS_SECOND)
    return f"{first}{second}"


def _is_ascii_number(digits: str, length: int) -> bool:
    # \D keeps non-ASCII decimal digits (e.g. Arabic-Indic), reject those here
    return len(digits) == length and set(digits) <= _ASCII_DIGITS


def is_valid_cpf(digits: str) -> bool:
    """Check an unformatted 11-digit CPF."""
    if not _is_ascii_number(digits, CPF_LENGTH):
        return False
    return cpf_check_digits(digits[:9]) == digits[9:]


def is_valid_cnpj(digits: str) -> bool:
    """Check an unformatted 14-digit CNPJ."""
    if not _is_ascii_number(digits, CNPJ_LENGTH):
        return False
    return cnpj_check_digits(digits[:12]) == digits[12:]


def classify_document(raw: str) -> DocumentType:
    """Classify ``raw`` as CPF or CNPJ by its digit count."""
    length = len(only_digits(raw))
    if length == CPF_LENGTH:
        return DocumentType.CPF
    if length == CNPJ_LENGTH:
        return DocumentType.CNPJ
    return DocumentType.UNKNOWN


def is_valid_document(raw: str) -> bool:
    """Validate a CPF or CNPJ, formatted or not.

    Punctuation is ignored; the digit count selects the algorithm.
    Any other length is simply invalid.

    Examples
    --------
    >>> is_valid_document("529.982.247-25")
    True
    >>> is_valid_document("52998224726")
    False
    >>> is_valid_document("NULL")
    False
    """
    digits = only_digits(raw)
    if len(digits) == CPF_LENGTH:
        return is_valid_cpf(digits)
    if len(digits) == CNPJ_LENGTH:
        return is_valid_cnpj(digits)
    return False
