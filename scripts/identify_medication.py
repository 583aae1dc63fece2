#!/usr/bin/env python
# ruff: noqa: E402
"""Rank medication records from a JSON file against recognition signals."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

SCRIPT_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPT_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from medmatch.core.config import Settings, get_settings  # type: ignore
from medmatch.core.exceptions import ConfigurationError, InputValidationError, RecordValidationError  # type: ignore
from medmatch.core.logging import configure_logging, get_logger  # type: ignore
from medmatch.core.models import MedicationRecord, QuerySignals  # type: ignore
from medmatch.identification import IdentificationService  # type: ignore

LOGGER = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--records", type=Path, required=True, help="JSON list of medication records.")
    parser.add_argument("--signals", type=Path, required=True, help="JSON object with query signals.")
    parser.add_argument("--max-results", type=int, help="Override the maximum number of results.")
    parser.add_argument("--min-relevance", type=float, help="Override the exclusive relevance threshold.")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level.")
    return parser.parse_args(argv)


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def build_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {}
    if args.max_results is not None:
        overrides["max_results"] = args.max_results
    if args.min_relevance is not None:
        overrides["min_relevance"] = args.min_relevance
    if args.log_level:
        overrides["log_level"] = args.log_level
    base = get_settings()
    if not overrides:
        return base
    return Settings(**{**base.model_dump(), **overrides})


def run(args: argparse.Namespace, settings: Settings) -> list[dict[str, Any]]:
    records_payload = load_json(args.records)
    if isinstance(records_payload, dict):
        records_payload = records_payload.get("records") or []
    if not isinstance(records_payload, list):
        raise RecordValidationError(None, [f"records file must hold a JSON list, got {type(records_payload).__name__}"])
    records = [MedicationRecord.from_dict(item) for item in records_payload]
    signals = QuerySignals.from_dict(load_json(args.signals))
    results = IdentificationService(settings).identify_scored(signals, records)
    return [
        {
            "id": item.record.id,
            "name": item.record.name,
            "score": round(item.score, 6),
            "deep_link": item.record.deep_link(settings.deep_link_scheme),
        }
        for item in results
    ]


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = build_settings(args)
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings=settings)
    try:
        output = run(args, settings)
    except (InputValidationError, json.JSONDecodeError, OSError) as exc:
        LOGGER.error("identify_medication.invalid_input", error=str(exc), error_type=type(exc).__name__)
        print(str(exc), file=sys.stderr)
        return 2
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
