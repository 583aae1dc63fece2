"""Heuristics over recognized text fragments."""

from __future__ import annotations

import re

DOSAGE_PATTERN = re.compile(r"\d+\s?(?:mg|mcg|g|ml|IU|units?)", flags=re.IGNORECASE)
MAX_NAME_WORDS = 3


def extract_dosage(text: str | None) -> str | None:
    """Return the first dosage expression in ``text`` as written (``"500mg"``, ``"10 ml"``)."""
    if not text:
        return None
    match = DOSAGE_PATTERN.search(text)
    if not match:
        return None
    return match.group(0)


def looks_like_medication_name(text: str | None) -> bool:
    """Short capitalized text that is mostly letters, e.g. a label's product line."""
    if not text:
        return False
    has_capital = any(char.isupper() for char in text)
    letters = sum(1 for char in text if char.isalpha())
    digits = sum(1 for char in text if char.isdigit())
    return has_capital and letters > digits and len(text.split()) <= MAX_NAME_WORDS
