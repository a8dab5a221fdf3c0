# src/fitcoach/llm/llm_client.py
"""
GenAI client wrapper around google.generativeai (GenerativeModel).
`generate_text` is the async entry point and returns the model's text.

Unlike image generation there is no fallback provider for text: a missing key
raises ConfigurationError, any SDK/transport problem or empty answer raises
UpstreamError. No retries happen here.
"""

import asyncio
import logging
from typing import Any, Optional

import google.generativeai as genai

from fitcoach.config import TextSettings
from fitcoach.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)
logger.addHandler(logging.StreamHandler())
logger.setLevel(logging.INFO)


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _extract_text_from_response(resp: Any) -> str:
    """Join the text parts of the first candidate (dicts or SDK objects)."""
    candidates = _get(resp, "candidates") or []
    if not candidates:
        return ""
    content = _get(candidates[0], "content")
    parts = _get(content, "parts") or []
    texts = [_get(part, "text") for part in parts]
    return "\n".join(t for t in texts if t)


def generate_text_sync(prompt: str, settings: Optional[TextSettings] = None) -> str:
    """Blocking call to Gemini. Returns the generated text."""
    settings = settings or TextSettings.from_env()
    logger.info("Gemini API Key: %s", "Present" if settings.api_key else "Missing")

    if not settings.api_key:
        raise ConfigurationError("Gemini API key not found. Set GEMINI_API_KEY in the environment or .env")

    try:
        genai.configure(api_key=settings.api_key)
        model = genai.GenerativeModel(settings.model)
        logger.info("Making Gemini API request (model=%s)", settings.model)
        resp = model.generate_content(
            prompt,
            generation_config={
                "temperature": settings.temperature,
                "max_output_tokens": settings.max_output_tokens,
            },
            request_options={"timeout": settings.timeout},
        )
    except Exception as e:
        logger.exception("Gemini API call failed: %s", e)
        status = getattr(e, "code", None)
        raise UpstreamError(f"Gemini API error: {e}", status_code=status if isinstance(status, int) else None) from e

    text = _extract_text_from_response(resp)
    if not text:
        logger.error("Gemini returned empty content: %r", resp)
        raise UpstreamError("Gemini returned empty response")
    return text


async def generate_text(prompt: str, settings: Optional[TextSettings] = None) -> str:
    """
    Async wrapper that runs the blocking `generate_text_sync` in a thread.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, generate_text_sync, prompt, settings)
