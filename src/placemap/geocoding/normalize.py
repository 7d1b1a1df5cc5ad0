"""Text normalization for directory matching."""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    """Drop combining marks: ``"São José"`` → ``"Sao Jose"``."""
    return "".join(c for c in unicodedata.normalize("NFKD", text) if not unicodedata.combining(c))


def normalize_text(text: str | None) -> str:
    """Normalize text for matching.

    Rules:
      - strip diacritics
      - case-fold
      - collapse whitespace
      - strip leading/trailing spaces
    """
    if not text:
        return ""
    folded = strip_diacritics(text).casefold()
    return _WHITESPACE_RE.sub(" ", folded).strip()
