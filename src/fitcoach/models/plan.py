# src/fitcoach/models/plan.py
from typing import List

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MOTIVATION = "You've got this. One workout at a time."


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Exercise(_Frozen):
    name: str = ""
    sets: str = ""
    reps: str = ""
    rest: str = ""
    description: str = ""


class DailyRoutine(_Frozen):
    day: str = ""
    exercises: List[Exercise] = Field(default_factory=list)


class WorkoutPlan(_Frozen):
    daily_routines: List[DailyRoutine] = Field(default_factory=list, alias="dailyRoutines")


class Meals(_Frozen):
    breakfast: str = ""
    lunch: str = ""
    dinner: str = ""
    snacks: str = ""


class DietPlan(_Frozen):
    meals: Meals = Field(default_factory=Meals)


class FitnessPlan(_Frozen):
    """Validated plan handed to the API and UI. Build it via `validate_plan`."""

    workout: WorkoutPlan
    diet: DietPlan
    tips: List[str] = Field(default_factory=list)
    motivation: str = DEFAULT_MOTIVATION

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
