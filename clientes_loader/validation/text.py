"""Free-text normalization: upper-case and fold Latin accents."""

_ACCENT_GROUPS = {
    "A": "áàâãä",
    "E": "éèêë",
    "I": "íìîï",
    "O": "óòôõö",
    "U": "úùûü",
    "C": "ç",
}

# Upper-casing runs first, so the upper-case forms are the ones that matter.
_ACCENT_TABLE = str.maketrans(
    {
        accented: plain
        for plain, group in _ACCENT_GROUPS.items()
        for accented in group + group.upper()
    }
)


def normalize_text(text: str) -> str:
    """Upper-case ``text`` and strip the accents of the supported letters.

    Characters outside the accent table (digits, punctuation, other
    scripts) are returned unchanged.

    Examples
    --------
    >>> normalize_text("joão")
    'JOAO'
    >>> normalize_text("Açaí 24h")
    'ACAI 24H'
    """
    return text.upper().translate(_ACCENT_TABLE)
