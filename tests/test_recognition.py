"""Tests for helpers over recognizer and language-model output."""

from typing import Any

import pytest

from medmatch import identify
from medmatch.core.exceptions import AnalysisParseError, SignalValidationError
from medmatch.core.models import PillColor, RecognizedText
from medmatch.recognition import (
    MedicationAnalysis,
    MedicationTextAnalyzer,
    VisionAnalysis,
    best_guess_name,
    extract_dosage,
    looks_like_medication_name,
)


class FakeLanguageModel:
    def __init__(self, response: Any) -> None:
        self.response = response
        self.calls: list[dict[str, Any]] = []

    def invoke(self, input_data: dict[str, Any]) -> Any:
        self.calls.append(input_data)
        return self.response


@pytest.fixture
def advil_label() -> VisionAnalysis:
    return VisionAnalysis(
        text_elements=(
            RecognizedText("Advil", confidence=0.95),
            RecognizedText("Ibuprofen Tablets 200mg", confidence=0.9),
            RecognizedText("Take 1 tablet every 4 to 6 hours", confidence=0.8),
        ),
        pill_color="orange",
        pill_shape="round",
    )


class TestTextHeuristics:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Aspirin 500mg", "500mg"),
            ("Children's syrup 10 ML", "10 ML"),
            ("Vitamin D3 1000 IU softgels", "1000 IU"),
            ("B12 250mcg", "250mcg"),
            ("Take 2 tablets daily", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract_dosage(self, text, expected):
        assert extract_dosage(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Aspirin", True),
            ("ASPIRIN 81", True),
            ("Extra Strength Tylenol", True),
            ("500mg 100 tablets", False),
            ("aspirin", False),
            ("Take One Tablet By Mouth", False),
            ("", False),
        ],
    )
    def test_looks_like_medication_name(self, text, expected):
        assert looks_like_medication_name(text) is expected


class TestVisionAnalysis:
    def test_derived_terms(self, advil_label):
        assert advil_label.medication_names == ["Advil", "Ibuprofen Tablets 200mg"]
        assert advil_label.dosages == ["200mg"]
        assert advil_label.search_terms == ["Advil", "Ibuprofen Tablets 200mg", "200mg", "orange", "round"]

    def test_to_signals_keeps_names_and_dosages(self, advil_label):
        signals = advil_label.to_signals(labels=("pill",), ai_analysis=MedicationAnalysis(name="Ibuprofen"))
        assert [element.text for element in signals.recognized_text] == [
            "Advil",
            "Ibuprofen Tablets 200mg",
            "200mg",
        ]
        assert signals.recognized_text[2].confidence == 0.9
        assert signals.labels == ("pill",)
        assert signals.color is PillColor.ORANGE
        assert signals.ai_terms == ("Ibuprofen",)
        assert signals.code is None

    def test_signals_identify_matching_record(self, advil_label, make_record, settings):
        candidates = [
            make_record("Aspirin", brand_names=("Bayer",), pill_color="white"),
            make_record(
                "Ibuprofen",
                brand_names=("Advil",),
                dosage_amount="200mg",
                pill_color="orange",
                pill_shape="round",
            ),
        ]
        result = identify(advil_label.to_signals(), candidates, settings=settings)
        assert result[0].name == "Ibuprofen"

    def test_barcode_carried_into_signals(self, make_record, settings):
        vision = VisionAnalysis(barcode="0573-0164")
        target = make_record("Ibuprofen", external_code="0573-0164")
        assert vision.to_signals().code == "0573-0164"
        assert identify(vision.to_signals(), [make_record("Aspirin"), target], settings=settings) == [target]

    def test_unknown_color_rejected(self):
        with pytest.raises(SignalValidationError):
            VisionAnalysis(pill_color="plaid")

    def test_best_guess_name(self, advil_label):
        assert best_guess_name(advil_label) == "Advil"
        assert best_guess_name(advil_label, MedicationAnalysis(name="Ibuprofen")) == "Ibuprofen"
        assert best_guess_name(VisionAnalysis()) is None


class TestMedicationAnalysis:
    def test_fenced_response(self):
        raw = '```json\n{"name": "Advil", "brandNames": ["Advil", "Motrin"], "dosage": "200mg"}\n```'
        analysis = MedicationAnalysis.from_response(raw)
        assert analysis.name == "Advil"
        assert analysis.brand_names == ["Advil", "Motrin"]
        assert analysis.dosage_amount == "200mg"
        assert analysis.search_terms() == ["Advil", "Motrin", "200mg"]

    def test_reasoning_prefix_is_ignored(self):
        analysis = MedicationAnalysis.from_response('<think>label looks blurry</think>{"name": "Aspirin"}')
        assert analysis.name == "Aspirin"

    def test_mapping_response(self):
        analysis = MedicationAnalysis.from_response({"generic_name": " Acetaminophen ", "brand_names": "Tylenol"})
        assert analysis.generic_name == "Acetaminophen"
        assert analysis.brand_names == ["Tylenol"]

    @pytest.mark.parametrize("raw", ["not json at all", "[1, 2]", {"brand_names": {"a": 1}}])
    def test_unparseable_response(self, raw):
        with pytest.raises(AnalysisParseError):
            MedicationAnalysis.from_response(raw)


class TestMedicationTextAnalyzer:
    def test_blank_text_skips_model(self):
        llm = FakeLanguageModel({"name": "Aspirin"})
        assert MedicationTextAnalyzer(llm).analyze("   ") == MedicationAnalysis()
        assert llm.calls == []

    def test_analyze_sends_prompt_and_context(self):
        llm = FakeLanguageModel('{"name": "Aspirin", "active_ingredient": "Aspirin"}')
        analysis = MedicationTextAnalyzer(llm).analyze("  Bayer Aspirin 325mg ")
        assert analysis.name == "Aspirin"
        assert llm.calls[0]["context"] == "Bayer Aspirin 325mg"
        assert llm.calls[0]["prompt"] == MedicationTextAnalyzer.ANALYSIS_PROMPT

    def test_analyze_elements_filters_by_confidence(self):
        llm = FakeLanguageModel({"name": "Aspirin"})
        analyzer = MedicationTextAnalyzer(llm)
        elements = [
            RecognizedText("Aspirin", confidence=0.95),
            RecognizedText("smudge", confidence=0.3),
            RecognizedText("edge", confidence=0.7),
            RecognizedText("325mg"),
        ]
        analyzer.analyze_elements(elements)
        analyzer.analyze_elements(elements, min_confidence=0.2)
        assert [call["context"] for call in llm.calls] == ["Aspirin 325mg", "Aspirin smudge edge 325mg"]

    def test_suggest_queries(self):
        llm = FakeLanguageModel('{"queries": [" Advil ", 3, "", "Ibuprofen"]}')
        assert MedicationTextAnalyzer(llm).suggest_queries("Advil 200mg") == ["Advil", "Ibuprofen"]

    def test_suggest_queries_requires_list(self):
        llm = FakeLanguageModel({"queries": "Advil"})
        with pytest.raises(AnalysisParseError):
            MedicationTextAnalyzer(llm).suggest_queries("Advil")

    def test_suggest_queries_blank_text(self):
        llm = FakeLanguageModel({"queries": ["x"]})
        assert MedicationTextAnalyzer(llm).suggest_queries("") == []
        assert llm.calls == []
