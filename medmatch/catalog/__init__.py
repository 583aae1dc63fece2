"""Common-medication reference table."""

from .common import (
    COMMON_MEDICATIONS,
    CommonMedication,
    MedicationCategory,
    find_common_medication,
    suggest_medications,
)

__all__ = [
    "COMMON_MEDICATIONS",
    "CommonMedication",
    "MedicationCategory",
    "find_common_medication",
    "suggest_medications",
]
