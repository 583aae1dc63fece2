"""Term extraction, edit distance and relevance scoring."""

from .distance import edit_distance, min_edit_distance
from .scorer import MatchTier, RelevanceScorer, score
from .terms import extract_terms, normalize_term, normalize_terms

__all__ = [
    "MatchTier",
    "RelevanceScorer",
    "edit_distance",
    "extract_terms",
    "min_edit_distance",
    "normalize_term",
    "normalize_terms",
    "score",
]
