# src/fitcoach/parsing/recovery.py
"""
Recover a plan-shaped dict from raw Gemini text.

Cascade, strict to lenient:
  1. parse the whole text as JSON
  2. strip markdown code fences and parse again
  3. extract dailyRoutines / meals / tips / motivation one by one

Stage 3 never raises: every slot that cannot be recovered falls back to its
default and is reported in `ParsedCandidate.fragments`. Whether the result is
good enough to show is decided by `validator.validate_plan`.
"""

import enum
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from fitcoach.models.plan import DEFAULT_MOTIVATION
from fitcoach.parsing.extractors import extract_bracket_block, extract_string_field

logger = logging.getLogger(__name__)

MEAL_KEYS = ("breakfast", "lunch", "dinner", "snacks")

_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")


class FragmentStatus(str, enum.Enum):
    VALUE = "value"          # found and parsed
    DEFAULT = "default"      # field absent, default used
    MALFORMED = "malformed"  # field present but unusable, default used


@dataclass(frozen=True)
class FragmentResult:
    status: FragmentStatus
    value: Any

    @property
    def recovered(self) -> bool:
        return self.status is FragmentStatus.VALUE


@dataclass(frozen=True)
class RawText:
    text: str


@dataclass(frozen=True)
class ParsedCandidate:
    """JSON-shaped but unvalidated. `stage` records which strategy produced it."""

    data: Dict[str, Any]
    stage: str
    fragments: Dict[str, FragmentResult] = field(default_factory=dict)


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _strict_parse(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(parsed, dict):
        return None
    if parsed.get("workout") is None or parsed.get("diet") is None:
        return None
    data = dict(parsed)
    if data.get("tips") is None:
        data["tips"] = []
    if not data.get("motivation"):
        data["motivation"] = DEFAULT_MOTIVATION
    return data


def _mentions(text: str, field_name: str) -> bool:
    return f'"{field_name}"' in text


def _json_fragment(text: str, field_name: str, open_char: str, close_char: str,
                   expected: type, default: Any) -> FragmentResult:
    block = extract_bracket_block(text, field_name, open_char, close_char)
    if block is None:
        if _mentions(text, field_name):
            logger.warning("Could not isolate %s block (unterminated?)", field_name)
            return FragmentResult(FragmentStatus.MALFORMED, default)
        return FragmentResult(FragmentStatus.DEFAULT, default)
    try:
        parsed = json.loads(block)
    except json.JSONDecodeError:
        logger.warning("Could not parse %s, got: %s", field_name, block)
        return FragmentResult(FragmentStatus.MALFORMED, default)
    if not isinstance(parsed, expected):
        logger.warning("Unexpected %s shape: %s", field_name, type(parsed).__name__)
        return FragmentResult(FragmentStatus.MALFORMED, default)
    return FragmentResult(FragmentStatus.VALUE, parsed)


def _routines_fragment(text: str) -> FragmentResult:
    return _json_fragment(text, "dailyRoutines", "[", "]", list, [])


def _meals_fragment(text: str) -> FragmentResult:
    empty = {key: "" for key in MEAL_KEYS}
    result = _json_fragment(text, "meals", "{", "}", dict, empty)
    if not result.recovered:
        return result
    meals = {key: result.value.get(key) or "" for key in MEAL_KEYS}
    return FragmentResult(FragmentStatus.VALUE, meals)


def _tips_fragment(text: str) -> FragmentResult:
    result = _json_fragment(text, "tips", "[", "]", list, [])
    if not result.recovered:
        return result
    return FragmentResult(FragmentStatus.VALUE, [str(tip) for tip in result.value])


def _motivation_fragment(text: str) -> FragmentResult:
    value = extract_string_field(text, "motivation")
    if value is not None:
        return FragmentResult(FragmentStatus.VALUE, value)
    if _mentions(text, "motivation"):
        return FragmentResult(FragmentStatus.MALFORMED, DEFAULT_MOTIVATION)
    return FragmentResult(FragmentStatus.DEFAULT, DEFAULT_MOTIVATION)


def _piecewise(cleaned: str) -> ParsedCandidate:
    fragments = {
        "dailyRoutines": _routines_fragment(cleaned),
        "meals": _meals_fragment(cleaned),
        "tips": _tips_fragment(cleaned),
        "motivation": _motivation_fragment(cleaned),
    }

    data: Dict[str, Any] = {
        "tips": fragments["tips"].value,
        "motivation": fragments["motivation"].value,
    }
    # Both sections are emitted as soon as either shows up in the text; text
    # with no trace of a plan reaches the validator without workout/diet.
    workout_seen = fragments["dailyRoutines"].status is not FragmentStatus.DEFAULT or _mentions(cleaned, "workout")
    diet_seen = fragments["meals"].status is not FragmentStatus.DEFAULT or _mentions(cleaned, "diet")
    if workout_seen or diet_seen:
        data["workout"] = {"dailyRoutines": fragments["dailyRoutines"].value}
        data["diet"] = {"meals": fragments["meals"].value}

    return ParsedCandidate(data=data, stage="piecewise", fragments=fragments)


def recover_plan(raw: Union[str, RawText]) -> ParsedCandidate:
    text = raw.text if isinstance(raw, RawText) else raw
    text = text or ""

    strict = _strict_parse(text)
    if strict is not None:
        return ParsedCandidate(data=strict, stage="strict")

    cleaned = strip_code_fences(text)
    fenced = _strict_parse(cleaned)
    if fenced is not None:
        return ParsedCandidate(data=fenced, stage="fenced")

    logger.warning("Model output is not a clean JSON plan; falling back to field extraction")
    return _piecewise(cleaned)
