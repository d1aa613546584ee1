"""String normalization shared by catalog matching and category inference."""

from __future__ import annotations

import re
import unicodedata

LEADING_ARTICLES = ("the", "la", "le", "el", "los", "las", "les", "un", "une", "una")

_ARTICLE_RE = re.compile(r"^(?:%s)\s+" % "|".join(LEADING_ARTICLES))
_WS_RE = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(text: str) -> str:
    """Lowercase, drop diacritics, collapse whitespace."""
    return _WS_RE.sub(" ", strip_diacritics(text.lower())).strip()


def normalize(text: str | None) -> str:
    """Fold ``text`` and strip leading articles.

    Articles are stripped until none is left, so ``normalize`` is idempotent
    ("The La Pietà" and "La Pietà" both become "pieta").
    """
    if not text:
        return ""
    folded = fold(text)
    while True:
        stripped = _ARTICLE_RE.sub("", folded, count=1)
        if stripped == folded:
            return folded
        folded = stripped
