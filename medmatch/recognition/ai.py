"""Language-model assisted extraction of medication facts from label text."""

from __future__ import annotations

from typing import Any, Iterable, Protocol

from medmatch.core.exceptions import AnalysisParseError
from medmatch.core.json_utils import parse_json_response
from medmatch.core.logging import get_logger
from medmatch.core.models import RecognizedText

from .analysis import MedicationAnalysis

LOGGER = get_logger(__name__)


class LanguageModelProtocol(Protocol):
    """Minimal protocol for language models used for label analysis."""

    def invoke(self, input_data: dict[str, Any]) -> Any: ...


class MedicationTextAnalyzer:
    """Ask a language model to structure recognized label text."""

    ANALYSIS_PROMPT = (
        "You are a medication identification assistant. Extract structured information from "
        "medication label text. Be accurate and only extract information that is clearly present; "
        "use null for anything you are unsure about.\n"
        "Return strict JSON with keys:\n"
        "- `name`: primary medication name.\n"
        "- `generic_name`: generic or scientific name.\n"
        "- `brand_names`: list of brand names (at most 10).\n"
        "- `dosage_amount`: dosage such as '500mg' or '10ml'.\n"
        "- `active_ingredient`: active ingredient.\n"
        "- `pill_color`: pill color if mentioned.\n"
        "- `pill_shape`: pill shape if mentioned.\n"
        "Do not include extra commentary."
    )

    QUERY_PROMPT = (
        "You generate search queries for identifying a medication in a personal medication list. "
        "Include variations, generic names, brand names and common misspellings. "
        "Return strict JSON with a single key `queries` holding 5 to 10 strings."
    )

    def __init__(self, llm: LanguageModelProtocol, *, min_confidence: float = 0.7) -> None:
        self._llm = llm
        self._min_confidence = min_confidence

    def analyze(self, text: str) -> MedicationAnalysis:
        if not text or not text.strip():
            return MedicationAnalysis()
        raw_response = self._llm.invoke({"prompt": self.ANALYSIS_PROMPT, "context": text.strip()})
        analysis = MedicationAnalysis.from_response(raw_response)
        LOGGER.info("recognition.ai_analysis", name=analysis.name, term_count=len(analysis.search_terms()))
        return analysis

    def analyze_elements(
        self,
        elements: Iterable[RecognizedText],
        min_confidence: float | None = None,
    ) -> MedicationAnalysis:
        """Analyze the concatenation of text elements above ``min_confidence``."""
        threshold = self._min_confidence if min_confidence is None else min_confidence
        combined = " ".join(
            element.text
            for element in elements
            if element.confidence is None or element.confidence > threshold
        )
        return self.analyze(combined)

    def suggest_queries(self, text: str) -> list[str]:
        if not text or not text.strip():
            return []
        raw_response = self._llm.invoke({"prompt": self.QUERY_PROMPT, "context": text.strip()})
        payload = raw_response if isinstance(raw_response, dict) else parse_json_response(str(raw_response))
        queries = payload.get("queries") if isinstance(payload, dict) else payload
        if not isinstance(queries, list):
            raise AnalysisParseError("Expected a `queries` list in the response")
        return [query.strip() for query in queries if isinstance(query, str) and query.strip()]
