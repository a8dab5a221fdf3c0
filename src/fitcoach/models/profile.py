# src/fitcoach/models/profile.py
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserProfile(BaseModel):
    """Form inputs as submitted. Numeric fields stay strings at this layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    age: str
    gender: str
    height: str
    weight: str
    fitness_goal: str = Field(alias="fitnessGoal")
    fitness_level: str = Field(alias="fitnessLevel")
    workout_location: str = Field(alias="workoutLocation")
    dietary_preferences: str = Field(alias="dietaryPreferences")
    medical_history: str = Field(default="", alias="medicalHistory")
    stress_level: str = Field(default="", alias="stressLevel")

    @field_validator("name", "age", "gender", "height", "weight", "fitness_goal",
                     "fitness_level", "workout_location", "dietary_preferences",
                     mode="before")
    @classmethod
    def _required(cls, value):
        text = "" if value is None else str(value).strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("medical_history", "stress_level", mode="before")
    @classmethod
    def _optional(cls, value):
        return "" if value is None else str(value).strip()

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
