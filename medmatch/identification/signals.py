"""Merge heterogeneous recognition signals into one query term list."""

from __future__ import annotations

from typing import Iterable

from medmatch.core.config import Settings, get_settings
from medmatch.core.models import QuerySignals, RecognizedText
from medmatch.matching.terms import normalize_terms


def _accepted_texts(elements: Iterable[RecognizedText], min_confidence: float) -> Iterable[str]:
    for element in elements:
        if element.confidence is not None and element.confidence < min_confidence:
            continue
        yield element.text


def aggregate_signals(
    signals: QuerySignals,
    *,
    min_confidence: float | None = None,
    settings: Settings | None = None,
) -> list[str]:
    """Return the deduplicated, normalized query terms carried by ``signals``.

    Order is recognized text, semantic labels, AI-suggested terms, then the
    color and shape labels. The external code is never a query term. Text
    elements whose confidence is below ``min_confidence`` are skipped; elements
    without a confidence are always kept.
    """
    if min_confidence is None:
        min_confidence = (settings or get_settings()).min_text_confidence
    raw: list[str | None] = list(_accepted_texts(signals.recognized_text, min_confidence))
    raw.extend(signals.labels)
    raw.extend(signals.ai_terms)
    if signals.color is not None:
        raw.append(signals.color.label)
    if signals.shape is not None:
        raw.append(signals.shape.label)
    return normalize_terms(raw)
