"""Shared data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping
from uuid import UUID

from .exceptions import RecordValidationError, SignalValidationError


class PillColor(str, Enum):
    WHITE = "white"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    PINK = "pink"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    BROWN = "brown"
    GRAY = "gray"
    BLACK = "black"
    MULTICOLOR = "multicolor"

    @property
    def label(self) -> str:
        """Canonical lowercase label used as a search term."""
        return self.value

    @property
    def description(self) -> str:
        return self.value.capitalize()


class PillShape(str, Enum):
    ROUND = "round"
    OVAL = "oval"
    CAPSULE = "capsule"
    OBLONG = "oblong"
    RECTANGLE = "rectangle"
    TRIANGLE = "triangle"
    DIAMOND = "diamond"
    PENTAGON = "pentagon"
    HEXAGON = "hexagon"
    OCTAGON = "octagon"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Canonical lowercase label used as a search term."""
        return self.value

    @property
    def description(self) -> str:
        return self.value.capitalize()


def coerce_tag(enum_cls: type[Enum], value: Any) -> Any:
    """Return ``value`` as a member of ``enum_cls``; raise ``ValueError`` when unknown."""
    if value is None or isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{enum_cls.__name__} must be a string label, got {type(value).__name__}")
    text = value.strip().lower()
    if not text:
        return None
    try:
        return enum_cls(text)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"unknown {enum_cls.__name__} '{value}' (expected one of: {allowed})") from None


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key present with a non-null value."""
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _string_tuple(values: Iterable[Any] | None, *, what: str) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = (values,)
    if isinstance(values, Mapping) or not isinstance(values, Iterable):
        raise ValueError(f"{what} must be a list of strings, got {type(values).__name__}")
    items = tuple(values)
    for item in items:
        if not isinstance(item, str):
            raise ValueError(f"{what} entries must be strings, got {type(item).__name__}")
    return items


@dataclass(slots=True, frozen=True)
class MedicationMetadata:
    """Optional descriptive metadata attached to a record."""

    generic_name: str | None = None
    brand_names: tuple[str, ...] = ()
    active_ingredient: str | None = None
    dosage_amount: str | None = None
    pill_color: PillColor | None = None
    pill_shape: PillShape | None = None
    external_code: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        errors: list[str] = []
        try:
            object.__setattr__(self, "brand_names", _string_tuple(self.brand_names, what="brand_names"))
        except ValueError as exc:
            errors.append(str(exc))
        for attr, enum_cls in (("pill_color", PillColor), ("pill_shape", PillShape)):
            try:
                object.__setattr__(self, attr, coerce_tag(enum_cls, getattr(self, attr)))
            except ValueError as exc:
                errors.append(str(exc))
        for attr in ("generic_name", "active_ingredient", "dosage_amount", "external_code", "notes"):
            value = getattr(self, attr)
            if value is not None and not isinstance(value, str):
                errors.append(f"{attr} must be a string, got {type(value).__name__}")
        if errors:
            raise RecordValidationError(None, errors)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> MedicationMetadata:
        return cls(
            generic_name=_pick(payload, "generic_name", "genericName"),
            brand_names=_pick(payload, "brand_names", "brandNames"),
            active_ingredient=_pick(payload, "active_ingredient", "activeIngredient"),
            dosage_amount=_pick(payload, "dosage_amount", "dosageAmount"),
            pill_color=_pick(payload, "pill_color", "pillColor"),
            pill_shape=_pick(payload, "pill_shape", "pillShape"),
            external_code=_pick(payload, "external_code", "ndcCode", "ndc_code"),
            notes=_pick(payload, "notes"),
        )


@dataclass(slots=True, frozen=True)
class MedicationRecord:
    """An identifiable medication in the caller's store."""

    id: str
    name: str
    metadata: MedicationMetadata | None = None

    def __post_init__(self) -> None:
        errors: list[str] = []
        record_id = self.id
        if isinstance(record_id, UUID):
            record_id = str(record_id)
            object.__setattr__(self, "id", record_id)
        if not isinstance(record_id, str) or not record_id.strip():
            errors.append("id must be a non-empty string or UUID")
        if not isinstance(self.name, str) or not self.name.strip():
            errors.append("name must be a non-empty string")
        if self.metadata is not None and not isinstance(self.metadata, MedicationMetadata):
            errors.append("metadata must be a MedicationMetadata instance")
        if errors:
            raise RecordValidationError(self.id, errors)

    @property
    def external_code(self) -> str | None:
        return self.metadata.external_code if self.metadata else None

    def terms(self) -> frozenset[str]:
        from medmatch.matching.terms import extract_terms

        return extract_terms(self)

    def deep_link(self, scheme: str | None = None) -> str:
        from .uris import build_medication_uri

        return build_medication_uri(self.id, scheme)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> MedicationRecord:
        if not isinstance(payload, Mapping):
            raise RecordValidationError(None, [f"record must be a JSON object, got {type(payload).__name__}"])
        metadata_block = payload.get("metadata")
        metadata = None
        if isinstance(metadata_block, MedicationMetadata):
            metadata = metadata_block
        elif isinstance(metadata_block, Mapping):
            try:
                metadata = MedicationMetadata.from_dict(metadata_block)
            except RecordValidationError as exc:
                raise RecordValidationError(payload.get("id"), exc.errors) from exc
        elif metadata_block is not None:
            raise RecordValidationError(
                payload.get("id"), [f"metadata must be a JSON object, got {type(metadata_block).__name__}"]
            )
        return cls(id=payload.get("id"), name=payload.get("name"), metadata=metadata)


def _bounding_box(value: Any, text: str) -> tuple[float, float, float, float]:
    if isinstance(value, (str, Mapping)) or not isinstance(value, Iterable):
        raise SignalValidationError(f"bounding box for '{text}' must be a list of 4 numbers, got {value!r}")
    box = tuple(value)
    if len(box) != 4 or any(isinstance(item, bool) or not isinstance(item, (int, float)) for item in box):
        raise SignalValidationError(f"bounding box for '{text}' must be a list of 4 numbers, got {value!r}")
    return box


@dataclass(slots=True, frozen=True)
class RecognizedText:
    """A text fragment produced by the upstream recognizer."""

    text: str
    confidence: float | None = None
    bounding_box: tuple[float, float, float, float] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise SignalValidationError(f"recognized text must be a string, got {type(self.text).__name__}")
        if self.confidence is not None:
            if isinstance(self.confidence, bool) or not isinstance(self.confidence, (int, float)):
                raise SignalValidationError(f"confidence for '{self.text}' must be a number")
            if not 0.0 <= float(self.confidence) <= 1.0:
                raise SignalValidationError(f"confidence for '{self.text}' must be within [0, 1], got {self.confidence}")
        if self.bounding_box is not None:
            object.__setattr__(self, "bounding_box", _bounding_box(self.bounding_box, self.text))

    @classmethod
    def coerce(cls, value: Any) -> RecognizedText:
        if isinstance(value, RecognizedText):
            return value
        if isinstance(value, str):
            return cls(text=value)
        if isinstance(value, Mapping):
            return cls(
                text=value.get("text"),
                confidence=value.get("confidence"),
                bounding_box=_pick(value, "bounding_box", "boundingBox"),
            )
        raise SignalValidationError(f"unsupported recognized text entry: {value!r}")


@dataclass(slots=True, frozen=True)
class QuerySignals:
    """Request-scoped evidence for one identification attempt."""

    recognized_text: tuple[RecognizedText, ...] = ()
    labels: tuple[str, ...] = ()
    color: PillColor | None = None
    shape: PillShape | None = None
    external_code: str | None = None
    ai_terms: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        texts = self.recognized_text
        if isinstance(texts, (str, RecognizedText, Mapping)):
            texts = (texts,)
        elif texts is not None and not isinstance(texts, Iterable):
            raise SignalValidationError(f"recognized_text must be a list, got {type(texts).__name__}")
        object.__setattr__(self, "recognized_text", tuple(RecognizedText.coerce(item) for item in texts or ()))
        try:
            object.__setattr__(self, "labels", _string_tuple(self.labels, what="labels"))
            object.__setattr__(self, "ai_terms", _string_tuple(self.ai_terms, what="ai_terms"))
            object.__setattr__(self, "color", coerce_tag(PillColor, self.color))
            object.__setattr__(self, "shape", coerce_tag(PillShape, self.shape))
        except ValueError as exc:
            raise SignalValidationError(str(exc)) from exc
        if self.external_code is not None and not isinstance(self.external_code, str):
            raise SignalValidationError("external_code must be a string")

    @property
    def code(self) -> str | None:
        """External code with surrounding whitespace removed, or ``None`` when blank."""
        if self.external_code is None:
            return None
        return self.external_code.strip() or None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> QuerySignals:
        if not isinstance(payload, Mapping):
            raise SignalValidationError(f"signals must be a JSON object, got {type(payload).__name__}")
        return cls(
            recognized_text=_pick(payload, "recognized_text", "text"),
            labels=_pick(payload, "labels"),
            color=_pick(payload, "color", "pill_color"),
            shape=_pick(payload, "shape", "pill_shape"),
            external_code=_pick(payload, "external_code", "barcode"),
            ai_terms=_pick(payload, "ai_terms"),
        )


@dataclass(slots=True, frozen=True)
class ScoredCandidate:
    record: MedicationRecord
    score: float
    index: int = 0


@dataclass(slots=True, frozen=True)
class MatchingProfile:
    """Tier weights and thresholds resolved from settings."""

    exact_weight: float
    partial_weight: float
    fuzzy_weight: float
    fuzzy_max_distance: int
    min_relevance: float
    max_results: int
    min_text_confidence: float = 0.0
