"""Unicode normalisation for cross-language word matching."""

from __future__ import annotations

import unicodedata

# Combining Diacritical Marks block
_COMBINING_START = 0x0300
_COMBINING_END = 0x036F

# Modifier letters and modifier symbols
_STRIPPED_CATEGORIES = frozenset({"Lm", "Sk"})

# Catalan gemination markers (l·l) collapsed by the dictionary loader
_GEMINATION_MARKERS = ("·", ".")


def _is_stripped(ch: str) -> bool:
    if _COMBINING_START <= ord(ch) <= _COMBINING_END:
        return True
    return unicodedata.category(ch) in _STRIPPED_CATEGORIES


def normalize_token(text: str | None) -> str:
    """Reduce a token to its canonical comparison form.

    Lower-cases, decomposes (NFD) and drops diacritics, spacing modifier
    letters and modifier symbols, so ``"Café"`` and ``"cafe"`` compare equal.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not _is_stripped(ch))


def is_similar_after_normalization(a: str | None, b: str | None) -> bool:
    """Return True when both strings share a normalized form."""
    if a is None or b is None:
        return a is None and b is None
    return normalize_token(a) == normalize_token(b)


def clean_headword(text: str) -> str:
    """Clean a raw dictionary headword: collapse gemination dots, lower-case, NFC.

    Accents are preserved; only :func:`normalize_token` removes them.
    """
    for marker in _GEMINATION_MARKERS:
        text = text.replace(marker, "")
    return unicodedata.normalize("NFC", text.lower())
