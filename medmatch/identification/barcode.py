"""Exact external-code lookup that short-circuits scoring."""

from __future__ import annotations

from typing import Sequence

from medmatch.core.logging import get_logger
from medmatch.core.models import MedicationRecord

LOGGER = get_logger(__name__)


def find_by_external_code(code: str | None, candidates: Sequence[MedicationRecord]) -> MedicationRecord | None:
    """Return the first candidate whose external code equals ``code`` exactly."""
    if not code:
        return None
    matches = [record for record in candidates if record.external_code == code]
    if not matches:
        return None
    if len(matches) > 1:
        LOGGER.warning(
            "identification.barcode_ambiguous",
            code=code,
            record_ids=[record.id for record in matches],
        )
    return matches[0]
