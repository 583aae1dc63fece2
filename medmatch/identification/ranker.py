"""Candidate scoring, filtering, ordering and truncation."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence

from medmatch.core.config import Settings, get_settings
from medmatch.core.logging import get_logger
from medmatch.core.models import MedicationRecord, ScoredCandidate
from medmatch.matching.scorer import RelevanceScorer
from medmatch.matching.terms import extract_terms, normalize_terms

LOGGER = get_logger(__name__)


class CandidateRanker:
    """Rank a candidate set against a query term list."""

    def __init__(self, settings: Settings | None = None, *, scorer: RelevanceScorer | None = None) -> None:
        self._settings = settings or get_settings()
        self._scorer = scorer or RelevanceScorer(self._settings)

    def rank(self, query_terms: Iterable[str], candidates: Sequence[MedicationRecord]) -> list[ScoredCandidate]:
        terms = normalize_terms((query_terms,) if isinstance(query_terms, str) else query_terms)
        if not terms or not candidates:
            return []

        # Indices are fixed here, before any worker sees the candidates.
        indexed = list(enumerate(candidates))
        scores = self._score_all(terms, indexed)

        profile = self._scorer.profile
        scored = [
            ScoredCandidate(record=record, score=value, index=index)
            for (index, record), value in zip(indexed, scores)
            if value > profile.min_relevance
        ]
        ranked = sorted(scored, key=lambda item: (-item.score, item.index))[: profile.max_results]
        LOGGER.info(
            "ranking.complete",
            term_count=len(terms),
            candidate_count=len(candidates),
            above_threshold=len(scored),
            returned=len(ranked),
        )
        return ranked

    def _score_all(self, terms: list[str], indexed: list[tuple[int, MedicationRecord]]) -> list[float]:
        def score_one(item: tuple[int, MedicationRecord]) -> float:
            return self._scorer.score_terms(terms, extract_terms(item[1]))

        workers = min(self._settings.max_concurrency, len(indexed))
        if workers <= 1 or len(indexed) < self._settings.parallel_threshold:
            return [score_one(item) for item in indexed]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(score_one, indexed))


def rank_candidates(
    query_terms: Iterable[str],
    candidates: Sequence[MedicationRecord],
    *,
    settings: Settings | None = None,
) -> list[ScoredCandidate]:
    """Score, filter (``> min_relevance``), sort and truncate ``candidates``."""
    return CandidateRanker(settings).rank(query_terms, candidates)
