"""Public service layer for medication identification."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from medmatch.core.config import Settings, get_settings
from medmatch.core.exceptions import RecordValidationError, SignalValidationError
from medmatch.core.logging import get_logger
from medmatch.core.models import MedicationRecord, QuerySignals, ScoredCandidate

from .barcode import find_by_external_code
from .ranker import CandidateRanker
from .signals import aggregate_signals

LOGGER = get_logger(__name__)


class IdentificationService:
    """High-level facade: signal aggregation, barcode shortcut, ranking.

    The service holds only its settings and stateless collaborators, so one
    instance can serve concurrent requests.
    """

    def __init__(self, settings: Settings | None = None, *, ranker: CandidateRanker | None = None) -> None:
        self._settings = settings or get_settings()
        self._ranker = ranker or CandidateRanker(self._settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    def identify_scored(
        self,
        signals: QuerySignals | Mapping[str, Any],
        candidates: Iterable[MedicationRecord],
    ) -> list[ScoredCandidate]:
        query = _coerce_signals(signals)
        pool = _validate_candidates(candidates)
        if not pool:
            return []

        code = query.code
        if code:
            hit = find_by_external_code(code, pool)
            if hit is not None:
                LOGGER.info("identification.barcode_hit", code=code, record_id=hit.id)
                index = next(position for position, record in enumerate(pool) if record is hit)
                return [ScoredCandidate(record=hit, score=1.0, index=index)][: self._settings.max_results]
            LOGGER.info("identification.barcode_miss", code=code, candidate_count=len(pool))

        terms = aggregate_signals(query, settings=self._settings)
        if not terms:
            LOGGER.info("identification.no_terms", candidate_count=len(pool))
            return []
        return self._ranker.rank(terms, pool)

    def identify(
        self,
        signals: QuerySignals | Mapping[str, Any],
        candidates: Iterable[MedicationRecord],
    ) -> list[MedicationRecord]:
        return [item.record for item in self.identify_scored(signals, candidates)]


def _coerce_signals(signals: QuerySignals | Mapping[str, Any]) -> QuerySignals:
    if isinstance(signals, QuerySignals):
        return signals
    if isinstance(signals, Mapping):
        return QuerySignals.from_dict(signals)
    raise SignalValidationError(f"signals must be QuerySignals or a mapping, got {type(signals).__name__}")


def _validate_candidates(candidates: Iterable[MedicationRecord]) -> list[MedicationRecord]:
    pool = list(candidates or ())
    seen: set[str] = set()
    for position, record in enumerate(pool):
        if not isinstance(record, MedicationRecord):
            raise RecordValidationError(None, [f"candidate #{position} is {type(record).__name__}, not MedicationRecord"])
        if record.id in seen:
            raise RecordValidationError(record.id, ["identifier appears more than once in the candidate set"])
        seen.add(record.id)
    return pool


def identify_scored(
    signals: QuerySignals | Mapping[str, Any],
    candidates: Sequence[MedicationRecord],
    *,
    settings: Settings | None = None,
) -> list[ScoredCandidate]:
    """Run the full pipeline and keep the relevance score of every result."""
    return IdentificationService(settings).identify_scored(signals, candidates)


def identify(
    signals: QuerySignals | Mapping[str, Any],
    candidates: Sequence[MedicationRecord],
    *,
    settings: Settings | None = None,
) -> list[MedicationRecord]:
    """Return up to ``max_results`` records best matching ``signals``."""
    return IdentificationService(settings).identify(signals, candidates)
