"""Shared fixtures for the medication identification tests."""

from __future__ import annotations

import os
from typing import Any, Callable

import pytest

from medmatch.core.config import Settings, get_settings
from medmatch.core.models import MedicationMetadata, MedicationRecord


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    for name in list(os.environ):
        if name.startswith("MEDMATCH_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def make_record() -> Callable[..., MedicationRecord]:
    counter = {"value": 0}

    def factory(name: str, record_id: str | None = None, **metadata: Any) -> MedicationRecord:
        counter["value"] += 1
        return MedicationRecord(
            id=record_id or f"med-{counter['value']}",
            name=name,
            metadata=MedicationMetadata(**metadata) if metadata else None,
        )

    return factory


@pytest.fixture
def pain_relievers(make_record) -> list[MedicationRecord]:
    return [
        make_record("Aspirin", record_id="aspirin"),
        make_record("Ibuprofen", record_id="ibuprofen"),
        make_record("Acetaminophen", record_id="acetaminophen"),
    ]
