# src/fitcoach/llm/prompts.py

from typing import Optional

from fitcoach.config import ImageSettings
from fitcoach.models.profile import UserProfile

MAX_RESPONSE_CHARS = 4000
MAX_DAYS = 3
MAX_EXERCISES_PER_DAY = 4
MAX_DESCRIPTION_WORDS = 15

IMAGE_CATEGORIES = ("exercise", "food")

FITNESS_PLAN_PROMPT_TEMPLATE = (
    "You are generating a JSON object for a fitness app.\n\n"
    "CRITICAL RULES:\n"
    "- Return ONLY a single valid JSON object.\n"
    "- Do NOT include markdown, backticks, or any text outside the JSON.\n"
    "- Keep the total response UNDER {max_chars} characters.\n"
    "- Use short, single-sentence descriptions.\n\n"
    "User Profile:\n"
    "- Name: {name}\n"
    "- Age: {age}\n"
    "- Gender: {gender}\n"
    "- Height: {height} cm\n"
    "- Weight: {weight} kg\n"
    "- Goal: {goal}\n"
    "- Level: {level}\n"
    "- Location: {location}\n"
    "- Diet: {diet}\n"
    "- Medical: {medical}\n"
    "- Stress: {stress}\n\n"
    "Return JSON in EXACTLY this structure (no extra keys):\n"
    "{{\n"
    "  \"workout\": {{\n"
    "    \"dailyRoutines\": [\n"
    "      {{\n"
    "        \"day\": \"Day name and focus\",\n"
    "        \"exercises\": [\n"
    "          {{\"name\": \"Exercise Name\", \"sets\": \"3-4\", \"reps\": \"10-15\", \"rest\": \"60s\", "
    "\"description\": \"Very short description (max {max_words} words).\"}}\n"
    "        ]\n"
    "      }}\n"
    "    ]\n"
    "  }},\n"
    "  \"diet\": {{\n"
    "    \"meals\": {{\n"
    "      \"breakfast\": \"Short meal description\",\n"
    "      \"lunch\": \"Short meal description\",\n"
    "      \"dinner\": \"Short meal description\",\n"
    "      \"snacks\": \"Short snack options\"\n"
    "    }}\n"
    "  }},\n"
    "  \"tips\": [\"Short tip 1\", \"Short tip 2\", \"Short tip 3\"],\n"
    "  \"motivation\": \"Short motivational quote.\"\n"
    "}}\n\n"
    "Constraints:\n"
    "- Limit to ONLY {max_days} days in \"dailyRoutines\".\n"
    "- Each day must have at MOST {max_exercises} exercises.\n"
    "- Each description is ONE sentence of at most {max_words} words.\n"
)


def fitness_plan_prompt(profile: UserProfile) -> str:
    return FITNESS_PLAN_PROMPT_TEMPLATE.format(
        max_chars=MAX_RESPONSE_CHARS,
        max_days=MAX_DAYS,
        max_exercises=MAX_EXERCISES_PER_DAY,
        max_words=MAX_DESCRIPTION_WORDS,
        name=profile.name,
        age=profile.age,
        gender=profile.gender,
        height=profile.height,
        weight=profile.weight,
        goal=profile.fitness_goal,
        level=profile.fitness_level,
        location=profile.workout_location,
        diet=profile.dietary_preferences,
        medical=profile.medical_history or "None",
        stress=profile.stress_level or "Not specified",
    )


def image_prompt(name: str, category: str, settings: Optional[ImageSettings] = None) -> str:
    """Descriptive photo prompt; exercise and food imagery are phrased differently."""
    settings = settings or ImageSettings(api_key=None)
    template = settings.exercise_template if category == "exercise" else settings.food_template
    return template.format(prompt=name)


def placeholder_prompt(category: str, settings: Optional[ImageSettings] = None) -> str:
    settings = settings or ImageSettings(api_key=None)
    if category == "exercise":
        return settings.generic_exercise_prompt
    return settings.generic_food_prompt
