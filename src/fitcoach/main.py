# src/fitcoach/main.py
from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fitcoach.agents.fitness_agent import FitnessAgent
from fitcoach.agents.image_agent import ImageAgent
from fitcoach.errors import NoSavedProfileError, PlanGenerationError
from fitcoach.memory.memory_bank import MemoryBank
from fitcoach.models.profile import UserProfile

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "Failed to generate fitness plan. Please try again."

ERROR_STATUS = {
    "configuration": 503,
    "upstream": 502,
    "schema": 502,
}

app = FastAPI(title="AI Fitness Coach API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Singletons used by API and Streamlit UI
memory = MemoryBank()
fitness_agent = FitnessAgent(memory=memory)
image_agent = ImageAgent()


def _failure(exc: PlanGenerationError) -> JSONResponse:
    logger.error("Plan generation failed (%s): %s", exc.kind, exc)
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.kind, 500),
        content={"status": "error", "error": exc.kind, "message": RETRY_MESSAGE},
    )


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.post("/plan/generate")
async def generate_plan(profile: UserProfile):
    try:
        plan = await fitness_agent.generate_plan(profile)
    except PlanGenerationError as exc:
        return _failure(exc)
    return {"status": "ok", "plan": plan.to_dict()}


@app.post("/plan/regenerate")
async def regenerate_plan():
    try:
        plan = await fitness_agent.regenerate_plan()
    except NoSavedProfileError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except PlanGenerationError as exc:
        return _failure(exc)
    return {"status": "ok", "plan": plan.to_dict()}


@app.get("/plan/last")
async def last_plan():
    plan = memory.get_plan()
    profile = memory.get_profile()
    return {
        "status": "ok",
        "plan": plan.to_dict() if plan else None,
        "profile": profile.model_dump(by_alias=True) if profile else None,
    }


@app.post("/plan/clear")
async def clear_plan():
    memory.clear()
    return {"status": "ok"}


@app.post("/image/generate")
async def generate_image(payload: dict):
    """Always 200: a missing image is reported as imageUrl=null, never as an error."""
    prompt = str(payload.get("prompt") or "")
    category = str(payload.get("type") or "")
    result = await image_agent.resolve(prompt, category)
    body = {"imageUrl": result.url}
    if result.note:
        body["note"] = result.note
    return body
