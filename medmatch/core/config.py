"""Application configuration primitives."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .models import MatchingProfile

DEFAULT_SETTINGS_PATH = Path("medmatch.toml")


class Settings(BaseSettings):
    """Central configuration for the identification engine."""

    min_relevance: float = 0.1
    max_results: int = 10
    fuzzy_max_distance: int = 2
    exact_weight: float = 1.0
    partial_weight: float = 0.5
    fuzzy_weight: float = 0.3
    min_text_confidence: float = 0.0

    max_concurrency: int = 1
    parallel_threshold: int = 256

    deep_link_scheme: str = "medmatch"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(env_prefix="MEDMATCH_", env_file=(), extra="ignore")

    @model_validator(mode="after")
    def _check_policy(self) -> Settings:
        if self.min_relevance < 0 or self.max_results < 0 or self.fuzzy_max_distance < 0:
            raise ConfigurationError("min_relevance, max_results and fuzzy_max_distance must be non-negative")
        if not 0.0 <= self.min_text_confidence <= 1.0:
            raise ConfigurationError("min_text_confidence must be within [0, 1]")
        if self.max_concurrency < 1 or self.parallel_threshold < 1:
            raise ConfigurationError("max_concurrency and parallel_threshold must be at least 1")
        if not 1.0 >= self.exact_weight > self.partial_weight > self.fuzzy_weight > 0:
            raise ConfigurationError(
                "Tier weights must satisfy 1 >= exact > partial > fuzzy > 0 "
                f"(got {self.exact_weight}, {self.partial_weight}, {self.fuzzy_weight})"
            )
        if not self.deep_link_scheme.strip():
            raise ConfigurationError("deep_link_scheme must not be blank")
        return self

    @property
    def profile(self) -> MatchingProfile:
        """Expose the scoring policy as an immutable value."""
        return MatchingProfile(
            exact_weight=self.exact_weight,
            partial_weight=self.partial_weight,
            fuzzy_weight=self.fuzzy_weight,
            fuzzy_max_distance=self.fuzzy_max_distance,
            min_relevance=self.min_relevance,
            max_results=self.max_results,
            min_text_confidence=self.min_text_confidence,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    overrides = _load_settings_overrides()
    return Settings(**overrides)


def _load_settings_overrides(settings_path: Path = DEFAULT_SETTINGS_PATH) -> dict[str, Any]:
    """Load configuration overrides from the TOML settings file."""
    if not settings_path.exists():
        return {}
    data = _read_toml(settings_path)
    section = data.get("medmatch")
    if not isinstance(section, dict):
        return {}
    return {key: value for key, value in section.items() if key in Settings.model_fields and value is not None}


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)
