"""Edit-distance primitives used by the fuzzy tier."""

from __future__ import annotations

from typing import Iterable

from rapidfuzz.distance import Levenshtein


def edit_distance(left: str, right: str) -> int:
    """Return the Levenshtein distance between two already-normalized strings.

    Insertions, deletions and substitutions each cost one. Comparison is over
    Unicode code points; case folding is the caller's job.
    """
    return Levenshtein.distance(left, right)


def min_edit_distance(term: str, candidates: Iterable[str], *, score_cutoff: int | None = None) -> int | None:
    """Smallest distance from ``term`` to any of ``candidates``.

    Returns ``None`` for an empty candidate pool. With ``score_cutoff`` the
    scan stops at the first candidate within the cutoff, and distances above it
    are reported as ``score_cutoff + 1``.
    """
    best: int | None = None
    for candidate in candidates:
        distance = Levenshtein.distance(term, candidate, score_cutoff=score_cutoff)
        if best is None or distance < best:
            best = distance
        if score_cutoff is not None and best <= score_cutoff:
            break
    return best
