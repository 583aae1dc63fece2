"""Identification pipeline public API."""

from .barcode import find_by_external_code
from .ranker import CandidateRanker, rank_candidates
from .service import IdentificationService, identify, identify_scored
from .signals import aggregate_signals

__all__ = [
    "CandidateRanker",
    "IdentificationService",
    "aggregate_signals",
    "find_by_external_code",
    "identify",
    "identify_scored",
    "rank_candidates",
]
