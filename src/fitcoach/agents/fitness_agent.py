# src/fitcoach/agents/fitness_agent.py
import logging

from fitcoach.errors import NoSavedProfileError
from fitcoach.llm.llm_client import generate_text
from fitcoach.llm.prompts import fitness_plan_prompt
from fitcoach.memory.memory_bank import MemoryBank
from fitcoach.models.plan import FitnessPlan
from fitcoach.models.profile import UserProfile
from fitcoach.parsing.recovery import recover_plan
from fitcoach.parsing.validator import validate_plan

logger = logging.getLogger(__name__)


class FitnessAgent:
    """Profile -> prompt -> Gemini -> recovered, validated plan."""

    def __init__(self, memory: MemoryBank):
        self.memory = memory

    async def generate_plan(self, profile: UserProfile) -> FitnessPlan:
        # The profile is remembered even if generation fails, so the user can retry.
        self.memory.save_profile(profile)

        prompt = fitness_plan_prompt(profile)
        text = await generate_text(prompt)

        candidate = recover_plan(text)
        if candidate.stage == "piecewise":
            degraded = [name for name, frag in candidate.fragments.items() if not frag.recovered]
            if degraded:
                logger.warning("Plan recovered with defaults for: %s", ", ".join(degraded))
        plan = validate_plan(candidate)

        self.memory.save_plan(plan)
        return plan

    async def regenerate_plan(self) -> FitnessPlan:
        profile = self.memory.get_profile()
        if profile is None:
            raise NoSavedProfileError("No saved profile to regenerate a plan from")
        return await self.generate_plan(profile)
