"""Helpers for constructing medication deep links."""

from __future__ import annotations

from typing import Final

DEFAULT_SCHEME: Final[str] = "medmatch"
MEDICATION_HOST: Final[str] = "medication"


def build_medication_uri(record_id: str, scheme: str | None = None) -> str:
    """Return the deep link that opens a medication in the consuming app."""
    if not record_id:
        return ""
    scheme_clean = (scheme or "").strip().rstrip(":/") or DEFAULT_SCHEME
    return f"{scheme_clean}://{MEDICATION_HOST}/{record_id}"
