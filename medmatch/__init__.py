"""
Medication identification engine.

The package exposes modular building blocks for:
- deriving searchable terms from medication records,
- tiered exact/partial/fuzzy relevance scoring,
- merging recognizer, classifier and AI signals into query terms,
- barcode short-circuit lookup and stable top-K ranking.
"""

from .core.config import Settings, get_settings
from .core.models import (
    MedicationMetadata,
    MedicationRecord,
    PillColor,
    PillShape,
    QuerySignals,
    RecognizedText,
    ScoredCandidate,
)
from .identification import identify, identify_scored
from .matching import score

__all__ = [
    "MedicationMetadata",
    "MedicationRecord",
    "PillColor",
    "PillShape",
    "QuerySignals",
    "RecognizedText",
    "ScoredCandidate",
    "Settings",
    "get_settings",
    "identify",
    "identify_scored",
    "score",
]
