# src/fitcoach/parsing/validator.py
"""The only place a FitnessPlan is built from recovered model output."""

import logging
from typing import Any, List, Mapping, Union

from fitcoach.errors import SchemaViolationError
from fitcoach.models.plan import (
    DEFAULT_MOTIVATION,
    DailyRoutine,
    DietPlan,
    Exercise,
    FitnessPlan,
    Meals,
    WorkoutPlan,
)
from fitcoach.parsing.recovery import MEAL_KEYS, ParsedCandidate

logger = logging.getLogger(__name__)

EXERCISE_FIELDS = ("name", "sets", "reps", "rest", "description")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _exercises(raw: Any) -> List[Exercise]:
    if not isinstance(raw, list):
        return []
    return [
        Exercise(**{key: _text(item.get(key)) for key in EXERCISE_FIELDS})
        for item in raw
        if isinstance(item, Mapping)
    ]


def _routines(workout: Any) -> List[DailyRoutine]:
    raw = workout.get("dailyRoutines") if isinstance(workout, Mapping) else None
    if not isinstance(raw, list):
        return []
    return [
        DailyRoutine(day=_text(item.get("day")), exercises=_exercises(item.get("exercises")))
        for item in raw
        if isinstance(item, Mapping)
    ]


def _meals(diet: Any) -> Meals:
    raw = diet.get("meals") if isinstance(diet, Mapping) else None
    if not isinstance(raw, Mapping):
        raw = {}
    return Meals(**{key: _text(raw.get(key)) for key in MEAL_KEYS})


def validate_plan(candidate: Union[ParsedCandidate, Mapping[str, Any]]) -> FitnessPlan:
    data = candidate.data if isinstance(candidate, ParsedCandidate) else candidate
    if not isinstance(data, Mapping):
        raise SchemaViolationError("Invalid plan structure from AI: not an object")

    missing = [key for key in ("workout", "diet") if data.get(key) is None]
    if missing:
        logger.error("Invalid plan structure from AI, missing %s", ", ".join(missing))
        raise SchemaViolationError(f"Invalid plan structure from AI: missing {', '.join(missing)}")

    tips = data.get("tips")
    motivation = _text(data.get("motivation")).strip()

    return FitnessPlan(
        workout=WorkoutPlan(daily_routines=_routines(data["workout"])),
        diet=DietPlan(meals=_meals(data["diet"])),
        tips=[_text(tip) for tip in tips] if isinstance(tips, list) else [],
        motivation=motivation or DEFAULT_MOTIVATION,
    )
