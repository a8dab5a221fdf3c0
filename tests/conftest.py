# tests/conftest.py
import json

import pytest

from fitcoach.models.profile import UserProfile

PROFILE_DATA = {
    "name": "Ana",
    "age": "29",
    "gender": "female",
    "height": "165",
    "weight": "60",
    "fitnessGoal": "muscle_gain",
    "fitnessLevel": "intermediate",
    "workoutLocation": "gym",
    "dietaryPreferences": "vegetarian",
}


def make_day(day: str, count: int) -> dict:
    return {
        "day": day,
        "exercises": [
            {
                "name": f"{day} exercise {i + 1}",
                "sets": "3-4",
                "reps": "8-12",
                "rest": "60s",
                "description": "Controlled tempo through full range.",
            }
            for i in range(count)
        ],
    }


PLAN_DOC = {
    "workout": {
        "dailyRoutines": [
            make_day("Monday - Push", 4),
            make_day("Wednesday - Pull", 3),
            make_day("Friday - Legs", 4),
        ]
    },
    "diet": {
        "meals": {
            "breakfast": "Greek yogurt with oats and berries",
            "lunch": "Lentil and quinoa bowl",
            "dinner": "Tofu stir-fry with brown rice",
            "snacks": "Almonds and an apple",
        }
    },
    "tips": ["Sleep 8 hours", "Drink water", "Track your lifts"],
    "motivation": "Strength is built one rep at a time.",
}


@pytest.fixture
def profile():
    return UserProfile(**PROFILE_DATA)


@pytest.fixture
def plan_json():
    return json.dumps(PLAN_DOC, indent=2)
