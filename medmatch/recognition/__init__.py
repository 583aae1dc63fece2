"""Helpers over recognizer, classifier and language-model output."""

from .ai import LanguageModelProtocol, MedicationTextAnalyzer
from .analysis import MedicationAnalysis, VisionAnalysis, best_guess_name
from .text import extract_dosage, looks_like_medication_name

__all__ = [
    "LanguageModelProtocol",
    "MedicationAnalysis",
    "MedicationTextAnalyzer",
    "VisionAnalysis",
    "best_guess_name",
    "extract_dosage",
    "looks_like_medication_name",
]
