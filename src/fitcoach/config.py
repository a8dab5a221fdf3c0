# src/fitcoach/config.py
"""
Environment-driven settings for the Gemini text client and the image chain.
Values are read when `from_env()` is called so tests can patch os.environ.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
FALLBACK_IMAGE_URL = "https://image.pollinations.ai/prompt/"

EXERCISE_IMAGE_TEMPLATE = (
    "realistic professional fitness photo of {prompt}, clear exercise form, "
    "gym setting, high quality fitness photography"
)
FOOD_IMAGE_TEMPLATE = (
    "professional food photography of {prompt}, healthy meal, appetizing, "
    "clean eating, natural lighting, high resolution"
)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class TextSettings:
    api_key: Optional[str]
    model: str = "gemini-flash-latest"
    temperature: float = 0.7
    max_output_tokens: int = 2000
    timeout: float = 120.0

    @classmethod
    def from_env(cls) -> "TextSettings":
        return cls(
            api_key=os.getenv("GEMINI_API_KEY") or None,
            model=os.getenv("GEMINI_MODEL", "gemini-flash-latest"),
            timeout=_float_env("GEMINI_TIMEOUT_SECONDS", 120.0),
        )


@dataclass(frozen=True)
class ImageSettings:
    api_key: Optional[str]
    model: str = "models/gemini-2.5-flash-image"
    api_base: str = GEMINI_API_BASE
    fallback_base_url: str = FALLBACK_IMAGE_URL
    exercise_template: str = EXERCISE_IMAGE_TEMPLATE
    food_template: str = FOOD_IMAGE_TEMPLATE
    generic_exercise_prompt: str = "generic fitness exercise image"
    generic_food_prompt: str = "generic healthy food image"
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "ImageSettings":
        return cls(
            api_key=os.getenv("GEMINI_API_KEY") or None,
            model=os.getenv("GEMINI_IMAGE_MODEL", "models/gemini-2.5-flash-image"),
            api_base=os.getenv("GEMINI_API_BASE", GEMINI_API_BASE),
            fallback_base_url=os.getenv("FALLBACK_IMAGE_URL", FALLBACK_IMAGE_URL),
            timeout=_float_env("IMAGE_TIMEOUT_SECONDS", 60.0),
        )
