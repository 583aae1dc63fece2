"""Custom exception hierarchy for the identification engine."""

from __future__ import annotations


class MedMatchError(Exception):
    """Base error for the medication matching engine."""


class ConfigurationError(MedMatchError):
    """Raised when settings are inconsistent."""


class InputValidationError(MedMatchError, ValueError):
    """Raised when a caller passes data that violates the input contract."""


class RecordValidationError(InputValidationError):
    """Raised when a medication record or candidate set is malformed."""

    def __init__(self, record_id: object, errors: list[str]) -> None:
        self.record_id = record_id
        self.errors = errors
        label = record_id if record_id not in (None, "") else "<missing id>"
        message = f"Record {label} is invalid:\n- " + "\n- ".join(errors)
        super().__init__(message)


class SignalValidationError(InputValidationError):
    """Raised when query signals carry out-of-range or unknown values."""


class AnalysisParseError(MedMatchError):
    """Raised when an AI analysis response cannot be parsed."""
