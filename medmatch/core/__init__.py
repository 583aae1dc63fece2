"""Shared core utilities for the medication identification engine."""

from .config import Settings, get_settings
from .exceptions import (
    AnalysisParseError,
    ConfigurationError,
    InputValidationError,
    MedMatchError,
    RecordValidationError,
    SignalValidationError,
)
from .logging import configure_logging, get_logger
from .models import (
    MatchingProfile,
    MedicationMetadata,
    MedicationRecord,
    PillColor,
    PillShape,
    QuerySignals,
    RecognizedText,
    ScoredCandidate,
)
from .uris import build_medication_uri

__all__ = [
    "Settings",
    "MatchingProfile",
    "MedicationMetadata",
    "MedicationRecord",
    "PillColor",
    "PillShape",
    "QuerySignals",
    "RecognizedText",
    "ScoredCandidate",
    "MedMatchError",
    "ConfigurationError",
    "InputValidationError",
    "RecordValidationError",
    "SignalValidationError",
    "AnalysisParseError",
    "get_settings",
    "configure_logging",
    "get_logger",
    "build_medication_uri",
]
