# src/fitcoach/memory/memory_bank.py
import json
from typing import Dict, Optional

from fitcoach.models.plan import FitnessPlan
from fitcoach.models.profile import UserProfile

PLAN_KEY = "fitness_plan"
PROFILE_KEY = "user_data"


class MemoryBank:
    """Simple in-memory storage for the last plan and the last profile."""

    def __init__(self):
        self._records: Dict[str, str] = {}

    def save_plan(self, plan: FitnessPlan):
        self._records[PLAN_KEY] = plan.to_json()

    def get_plan(self) -> Optional[FitnessPlan]:
        saved = self._records.get(PLAN_KEY)
        return FitnessPlan.model_validate(json.loads(saved)) if saved else None

    def save_profile(self, profile: UserProfile):
        self._records[PROFILE_KEY] = profile.to_json()

    def get_profile(self) -> Optional[UserProfile]:
        saved = self._records.get(PROFILE_KEY)
        return UserProfile.model_validate(json.loads(saved)) if saved else None

    def clear(self):
        self._records.clear()
