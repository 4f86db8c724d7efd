r"""Fold Azerbaijani-flavoured text into comparable ASCII tokens.

Every fuzzy comparison in the package (view slugs, rule-tab keys, album names,
status words) goes through :func:`normalize`, so two spellings of the same
label compare equal regardless of casing, diacritics, or punctuation.

Example
-------
>>> from forsaj_content.normalizer import normalize
>>> normalize("ŞƏLALƏ")
'selale'
>>> normalize("Xidmət Şərtləri")
'xidmetsertleri'
"""

from __future__ import annotations

import re
import unicodedata

# Azerbaijani dotted/dotless I must be resolved before str.lower.
_CASE_TABLE = str.maketrans({"İ": "i", "I": "ı"})
_LETTER_TABLE = str.maketrans(
    {
        "ə": "e",
        "ı": "i",
        "ö": "o",
        "ü": "u",
        "ğ": "g",
        "ş": "s",
        "ç": "c",
    }
)
_NON_TOKEN = re.compile(r"[^a-z0-9]+")


def normalize(value: object) -> str:
    """Return the ``[a-z0-9]*`` token for ``value``.

    ``None`` becomes an empty string and other non-string inputs are
    stringified first. The result is idempotent:
    ``normalize(normalize(x)) == normalize(x)``.
    """
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    lowered = text.translate(_CASE_TABLE).lower()
    substituted = lowered.translate(_LETTER_TABLE)
    decomposed = unicodedata.normalize("NFD", substituted)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_TOKEN.sub("", stripped)


__all__ = ["normalize"]
