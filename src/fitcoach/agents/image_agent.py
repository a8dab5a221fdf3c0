# src/fitcoach/agents/image_agent.py
from typing import Dict, Optional, Tuple

from fitcoach.config import ImageSettings
from fitcoach.images.image_chain import ImageResult, generate_image


class ImageAgent:
    """Per-exercise/meal images with a cache of already resolved references."""

    def __init__(self, settings: Optional[ImageSettings] = None, client=None):
        self.settings = settings
        self.client = client
        self._cache: Dict[Tuple[str, str], ImageResult] = {}

    @staticmethod
    def _key(name: str, category: str) -> Tuple[str, str]:
        return category, " ".join((name or "").lower().split())

    def cached(self, name: str, category: str) -> Optional[ImageResult]:
        return self._cache.get(self._key(name, category))

    async def resolve(self, name: str, category: str) -> ImageResult:
        hit = self.cached(name, category)
        if hit is not None:
            return hit

        settings = self.settings or ImageSettings.from_env()
        result = await generate_image(name, category, settings=settings, client=self.client)
        if result.url is not None:
            self._cache[self._key(name, category)] = result
        return result

    async def generate_image(self, name: str, category: str) -> Optional[str]:
        result = await self.resolve(name, category)
        return result.url
