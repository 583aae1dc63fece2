"""Searchable-term extraction for medication records."""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from medmatch.core.models import MedicationRecord


def normalize_term(text: str | None) -> str:
    """Lowercase and trim a term; ``None`` becomes the empty string."""
    if not text:
        return ""
    return unicodedata.normalize("NFC", text).strip().lower()


def normalize_terms(values: Iterable[str | None]) -> list[str]:
    """Normalize ``values``, dropping blanks and repeats while keeping first-seen order."""
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        term = normalize_term(value)
        if term and term not in seen:
            seen.add(term)
            ordered.append(term)
    return ordered


def iter_record_fields(record: MedicationRecord) -> Iterable[str | None]:
    yield record.name
    metadata = record.metadata
    if metadata is None:
        return
    yield metadata.generic_name
    yield from metadata.brand_names
    yield metadata.active_ingredient
    yield metadata.dosage_amount
    if metadata.pill_color is not None:
        yield metadata.pill_color.label
    if metadata.pill_shape is not None:
        yield metadata.pill_shape.label


def extract_terms(record: MedicationRecord) -> frozenset[str]:
    """Derive the lowercase term set of ``record``.

    The display name is always present. Notes and the external code are not
    searchable terms.
    """
    return frozenset(normalize_terms(iter_record_fields(record)))
