"""Structured results from the vision and language-model collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from medmatch.core.exceptions import AnalysisParseError, SignalValidationError
from medmatch.core.json_utils import parse_json_response
from medmatch.core.models import PillColor, PillShape, QuerySignals, RecognizedText, coerce_tag

from .text import extract_dosage, looks_like_medication_name


def _first_text(payload: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _dedupe(values: Iterable[str | None]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


@dataclass(slots=True)
class MedicationAnalysis:
    """Fields a language model extracted from label text."""

    name: str | None = None
    generic_name: str | None = None
    brand_names: list[str] = field(default_factory=list)
    dosage_amount: str | None = None
    active_ingredient: str | None = None
    pill_color: str | None = None
    pill_shape: str | None = None

    def search_terms(self) -> list[str]:
        return _dedupe(
            [self.name, self.generic_name, *self.brand_names, self.dosage_amount, self.active_ingredient]
        )

    @classmethod
    def from_response(cls, raw_response: Any) -> MedicationAnalysis:
        if isinstance(raw_response, Mapping):
            payload = raw_response
        else:
            payload = parse_json_response(str(raw_response))
        if not isinstance(payload, Mapping):
            raise AnalysisParseError(f"Expected a JSON object, got {type(payload).__name__}")
        brands = payload.get("brand_names") or payload.get("brandNames") or []
        if isinstance(brands, str):
            brands = [brands]
        if not isinstance(brands, list):
            raise AnalysisParseError("brand_names must be a list of strings")
        return cls(
            name=_first_text(payload, "name", "medication_name"),
            generic_name=_first_text(payload, "generic_name", "genericName"),
            brand_names=[brand.strip() for brand in brands if isinstance(brand, str) and brand.strip()],
            dosage_amount=_first_text(payload, "dosage_amount", "dosageAmount", "dosage"),
            active_ingredient=_first_text(payload, "active_ingredient", "activeIngredient"),
            pill_color=_first_text(payload, "pill_color", "pillColor"),
            pill_shape=_first_text(payload, "pill_shape", "pillShape"),
        )


@dataclass(slots=True, frozen=True)
class VisionAnalysis:
    """Combined output of the text recognizer, barcode decoder and classifier."""

    text_elements: tuple[RecognizedText, ...] = ()
    barcode: str | None = None
    pill_color: PillColor | None = None
    pill_shape: PillShape | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "text_elements", tuple(RecognizedText.coerce(item) for item in self.text_elements))
        try:
            object.__setattr__(self, "pill_color", coerce_tag(PillColor, self.pill_color))
            object.__setattr__(self, "pill_shape", coerce_tag(PillShape, self.pill_shape))
        except ValueError as exc:
            raise SignalValidationError(str(exc)) from exc

    @property
    def medication_names(self) -> list[str]:
        return [element.text for element in self.text_elements if looks_like_medication_name(element.text)]

    @property
    def dosages(self) -> list[str]:
        return [dosage for dosage in map(extract_dosage, (e.text for e in self.text_elements)) if dosage]

    @property
    def search_terms(self) -> list[str]:
        terms = self.medication_names + self.dosages
        if self.pill_color is not None:
            terms.append(self.pill_color.label)
        if self.pill_shape is not None:
            terms.append(self.pill_shape.label)
        return terms

    def to_signals(
        self,
        labels: Iterable[str] = (),
        ai_analysis: MedicationAnalysis | None = None,
    ) -> QuerySignals:
        """Build query signals keeping only name-like text and extracted dosages."""
        texts: list[RecognizedText] = []
        for element in self.text_elements:
            if looks_like_medication_name(element.text):
                texts.append(element)
            dosage = extract_dosage(element.text)
            if dosage:
                texts.append(RecognizedText(text=dosage, confidence=element.confidence))
        return QuerySignals(
            recognized_text=tuple(texts),
            labels=tuple(labels),
            color=self.pill_color,
            shape=self.pill_shape,
            external_code=self.barcode,
            ai_terms=tuple(ai_analysis.search_terms()) if ai_analysis else (),
        )


def best_guess_name(vision: VisionAnalysis, ai_analysis: MedicationAnalysis | None = None) -> str | None:
    """Prefer the language-model name, then the first name-like recognized text."""
    if ai_analysis is not None and ai_analysis.name:
        return ai_analysis.name
    names = vision.medication_names
    return names[0] if names else None
