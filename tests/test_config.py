"""Tests for settings resolution and validation."""

import pytest

from medmatch import score
from medmatch.core.config import Settings, _load_settings_overrides, get_settings
from medmatch.core.exceptions import ConfigurationError
from medmatch.core.models import MatchingProfile, MedicationRecord


class TestDefaults:
    def test_default_policy(self, settings):
        assert settings.min_relevance == 0.1
        assert settings.max_results == 10
        assert settings.fuzzy_max_distance == 2
        assert (settings.exact_weight, settings.partial_weight, settings.fuzzy_weight) == (1.0, 0.5, 0.3)
        assert settings.min_text_confidence == 0.0
        assert settings.max_concurrency == 1
        assert settings.deep_link_scheme == "medmatch"
        assert settings.log_level == "INFO"

    def test_profile_mirrors_settings(self):
        profile = Settings(max_results=4, fuzzy_max_distance=1).profile
        assert isinstance(profile, MatchingProfile)
        assert profile.max_results == 4
        assert profile.fuzzy_max_distance == 1
        assert profile.min_relevance == 0.1


class TestOverrides:
    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MEDMATCH_MAX_RESULTS", "3")
        monkeypatch.setenv("MEDMATCH_MIN_RELEVANCE", "0.25")
        settings = Settings()
        assert settings.max_results == 3
        assert settings.min_relevance == 0.25

    def test_toml_overrides(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            "[medmatch]\nmax_results = 5\nfuzzy_max_distance = 1\nunknown_key = true\n",
            encoding="utf-8",
        )
        assert _load_settings_overrides(path) == {"max_results": 5, "fuzzy_max_distance": 1}

    def test_missing_toml(self, tmp_path):
        assert _load_settings_overrides(tmp_path / "absent.toml") == {}

    def test_toml_without_section(self, tmp_path):
        path = tmp_path / "other.toml"
        path.write_text("[other]\nmax_results = 5\n", encoding="utf-8")
        assert _load_settings_overrides(path) == {}

    def test_get_settings_reads_working_directory_file(self, tmp_path):
        (tmp_path / "medmatch.toml").write_text("[medmatch]\nmax_results = 7\n", encoding="utf-8")
        assert get_settings().max_results == 7

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"min_relevance": -0.1},
            {"max_results": -1},
            {"fuzzy_max_distance": -1},
            {"min_text_confidence": 1.5},
            {"max_concurrency": 0},
            {"parallel_threshold": 0},
            {"partial_weight": 1.0},
            {"exact_weight": 1.5, "partial_weight": 1.2, "fuzzy_weight": 0.6},
            {"fuzzy_weight": 0.6},
            {"fuzzy_weight": 0.0},
            {"deep_link_scheme": "  "},
        ],
    )
    def test_invalid_configuration(self, overrides):
        with pytest.raises(ConfigurationError):
            Settings(**overrides)

    def test_zero_results_is_allowed(self):
        assert Settings(max_results=0).max_results == 0

    def test_custom_weights_keep_order(self):
        settings = Settings(exact_weight=0.9, partial_weight=0.4, fuzzy_weight=0.2)
        assert settings.profile.exact_weight == 0.9

    def test_exact_weight_above_one_rejected(self):
        with pytest.raises(ConfigurationError, match="1 >= exact"):
            Settings(exact_weight=2.0)

    def test_scores_stay_within_unit_interval(self):
        record = MedicationRecord(id="a", name="Aspirin")
        settings = Settings(exact_weight=1.0, partial_weight=0.9, fuzzy_weight=0.8)
        assert 0.0 <= score(["aspirin", "asp", "asprin"], record, settings=settings) <= 1.0
