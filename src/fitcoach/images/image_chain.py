# src/fitcoach/images/image_chain.py
"""
Image lookup for exercises and meals.

Gemini's image model is tried first when a key is configured. Every failure
(no key, error status, 410 retired model, missing image data, transport
error, bad body) ends at the Pollinations URL instead, which needs no auth
and is built locally, so callers always get either a reference or None.
"""

import logging
import re
import urllib.parse
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from fitcoach.config import ImageSettings
from fitcoach.llm.prompts import IMAGE_CATEGORIES, image_prompt, placeholder_prompt

logger = logging.getLogger(__name__)
logger.addHandler(logging.StreamHandler())
logger.setLevel(logging.INFO)

DEFAULT_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class ImageResult:
    url: Optional[str]
    source: str  # primary | fallback | unavailable
    note: Optional[str] = None


UNAVAILABLE = ImageResult(url=None, source="unavailable")


def sanitize_prompt(prompt: str) -> str:
    """Drop anything that could confuse the fallback provider's URL path."""
    text = re.sub(r"[()]", "", prompt)
    text = text.replace(",", "")
    text = re.sub(r"[^a-zA-Z0-9\s]", "", text)
    return text.strip()


def build_fallback_image_url(full_prompt: str, settings: Optional[ImageSettings] = None) -> str:
    settings = settings or ImageSettings.from_env()
    encoded = urllib.parse.quote(sanitize_prompt(full_prompt), safe="")
    return f"{settings.fallback_base_url}{encoded}"


def _fallback(full_prompt: str, settings: ImageSettings, note: str) -> ImageResult:
    return ImageResult(url=build_fallback_image_url(full_prompt, settings), source="fallback", note=note)


def _find_inline_image(data: Any) -> Optional[dict]:
    candidates = data.get("candidates") or []
    first = candidates[0] if candidates else {}
    content = first.get("content") or {}
    parts = content.get("parts") or content.get("Parts") or []
    for part in parts:
        inline = part.get("inline_data") or part.get("inlineData")
        if inline and inline.get("data"):
            return inline
    return None


async def _call_primary(full_prompt: str, settings: ImageSettings, client: httpx.AsyncClient) -> ImageResult:
    url = f"{settings.api_base}/{settings.model}:generateContent"
    response = await client.post(
        url,
        params={"key": settings.api_key},
        json={"contents": [{"parts": [{"text": full_prompt}]}]},
        timeout=settings.timeout,
    )

    if response.status_code == 410:
        logger.warning("Gemini image model %s is no longer available (410). Using fallback provider.", settings.model)
        return _fallback(
            full_prompt, settings,
            "Used fallback image provider because the Gemini image model is retired (status 410).",
        )

    if response.is_error:
        logger.error("Gemini image API error: %s %s", response.status_code, response.text or "<no body>")
        return _fallback(
            full_prompt, settings,
            f"Used fallback image provider because Gemini failed with status {response.status_code}.",
        )

    data = response.json()
    inline = _find_inline_image(data)
    if inline is None:
        logger.error("No inline image data in Gemini response: %s", data)
        return _fallback(
            full_prompt, settings,
            "Used fallback image provider because Gemini returned no image data.",
        )

    mime_type = inline.get("mime_type") or inline.get("mimeType") or DEFAULT_MIME_TYPE
    return ImageResult(url=f"data:{mime_type};base64,{inline['data']}", source="primary")


async def generate_image(prompt: str, category: str, settings: Optional[ImageSettings] = None,
                         client: Optional[httpx.AsyncClient] = None) -> ImageResult:
    """Resolve an image for `prompt` ("exercise" or "food"). Never raises."""
    settings = settings or ImageSettings.from_env()
    name = (prompt or "").strip()
    if not name or category not in IMAGE_CATEGORIES:
        logger.warning("Image request rejected (prompt=%r, type=%r)", prompt, category)
        return UNAVAILABLE

    try:
        full_prompt = image_prompt(name, category, settings)

        if not settings.api_key:
            logger.warning("GEMINI_API_KEY not configured - using fallback image provider.")
            return _fallback(
                full_prompt, settings,
                "Used fallback image provider because Gemini key is missing.",
            )

        if client is not None:
            return await _call_primary(full_prompt, settings, client)
        async with httpx.AsyncClient(timeout=settings.timeout) as own_client:
            return await _call_primary(full_prompt, settings, own_client)
    except Exception as e:
        logger.exception("Image generation error (Gemini + fallback): %s", e)
        return _fallback(
            placeholder_prompt(category, settings), settings,
            "Internal error during image generation. Used fallback provider.",
        )
