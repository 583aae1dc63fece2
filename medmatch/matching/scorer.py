"""Tiered relevance scoring of a record against query terms."""

from __future__ import annotations

from collections.abc import Iterable, Set
from enum import Enum

from medmatch.core.config import Settings, get_settings
from medmatch.core.models import MatchingProfile, MedicationRecord

from .distance import min_edit_distance
from .terms import extract_terms, normalize_terms


class MatchTier(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    FUZZY = "fuzzy"
    NONE = "none"


class RelevanceScorer:
    """Score records with the exact -> partial -> fuzzy tier policy.

    Each query term contributes the weight of the first tier it reaches; the
    total is divided by the number of distinct query terms, so the result lies
    in ``[0, exact_weight]``, which settings keep within ``[0, 1]``.
    """

    def __init__(self, settings: Settings | None = None, *, profile: MatchingProfile | None = None) -> None:
        self._profile = profile or (settings or get_settings()).profile

    @property
    def profile(self) -> MatchingProfile:
        return self._profile

    def classify(self, term: str, record_terms: Set[str]) -> MatchTier:
        """Return the first tier that ``term`` reaches against ``record_terms``."""
        if term in record_terms:
            return MatchTier.EXACT
        if any(term in candidate or candidate in term for candidate in record_terms):
            return MatchTier.PARTIAL
        cutoff = self._profile.fuzzy_max_distance
        distance = min_edit_distance(term, record_terms, score_cutoff=cutoff)
        if distance is not None and distance <= cutoff:
            return MatchTier.FUZZY
        return MatchTier.NONE

    def weight(self, tier: MatchTier) -> float:
        if tier is MatchTier.EXACT:
            return self._profile.exact_weight
        if tier is MatchTier.PARTIAL:
            return self._profile.partial_weight
        if tier is MatchTier.FUZZY:
            return self._profile.fuzzy_weight
        return 0.0

    def score_terms(self, query_terms: Iterable[str], record_terms: Set[str]) -> float:
        if isinstance(query_terms, str):
            query_terms = (query_terms,)
        terms = normalize_terms(query_terms)
        if not terms or not record_terms:
            return 0.0
        total = 0.0
        for term in terms:
            total += self.weight(self.classify(term, record_terms))
        return total / len(terms)

    def score(self, query_terms: Iterable[str], record: MedicationRecord) -> float:
        return self.score_terms(query_terms, extract_terms(record))


def score(
    query_terms: Iterable[str],
    record: MedicationRecord,
    *,
    settings: Settings | None = None,
) -> float:
    """Relevance of ``record`` for ``query_terms`` under the configured tier policy."""
    return RelevanceScorer(settings).score(query_terms, record)
