"""Reusable helpers for parsing JSON-like responses from language models."""

from __future__ import annotations

import json
import re
from typing import Any

from .exceptions import AnalysisParseError

THINK_PATTERN = re.compile(r"<think>.*?</think>", flags=re.DOTALL)
CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?(.*?)```", flags=re.DOTALL | re.IGNORECASE)
LINE_COMMENT_PATTERN = re.compile(r"^\s*//.*?$", flags=re.MULTILINE)


def strip_think(content: str) -> str:
    return THINK_PATTERN.sub("", content)


def extract_json_blob(content: str) -> str:
    stripped = strip_think(content).strip()
    match = CODE_BLOCK_PATTERN.search(stripped)
    if match:
        stripped = match.group(1)
    return stripped.strip()


def parse_json_response(content: str) -> Any:
    cleaned = strip_json_comments(extract_json_blob(content))
    attempts = [cleaned, truncate_to_balanced(cleaned)]
    for candidate in attempts:
        if not candidate:
            continue
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    raise AnalysisParseError("Unable to parse JSON from response")


def truncate_to_balanced(raw: str) -> str:
    """Cut ``raw`` after the first balanced top-level object or array."""
    start = min((pos for pos in (raw.find("{"), raw.find("[")) if pos >= 0), default=-1)
    if start < 0:
        return ""
    depth = 0
    in_string = False
    escaped = False
    for offset, char in enumerate(raw[start:]):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth == 0:
                return raw[start : start + offset + 1]
    return ""


def strip_json_comments(raw: str) -> str:
    return LINE_COMMENT_PATTERN.sub("", raw)
