"""Task illustrations: prompt, placeholder fallback and the per-process cache.

``generate_image`` is the strict path behind ``POST /api/generate-image`` and
raises on upstream failure. ``get_task_image`` is what schedule decoration
uses: it never raises, caches by normalised description and shares one
in-flight request between concurrent callers asking for the same task.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional
from urllib.parse import quote

from classification.task_classifier import TaskClassifier, TaskCategory
from imaging.image_client import OpenAIImageClient
from planner_ai.errors import InvalidRequestError, PlannerError
from planner_ai.models import ApiConfig, ImageResult

logger = logging.getLogger(__name__)

PLACEHOLDER_BASE_URL = "https://placehold.co/600x400"

# Described scenes instead of task wording, so the model draws objects rather
# than lettering.
IMAGE_CONCEPTS: Dict[str, str] = {
    "work": "a laptop on a tidy desk",
    "meeting": "a group of chat bubbles around a table",
    "study": "an open book with a pair of glasses",
    "exercise": "a running shoe and a dumbbell",
    "food": "a plate with a fork and knife",
    "shopping": "a shopping cart",
    "cleaning": "a broom and a sparkling bucket",
    "relaxation": "a cup of tea next to a leaf",
    "sleep": "a crescent moon over a pillow",
    "travel": "a suitcase with a paper plane",
    "entertainment": "a game controller and popcorn",
    "social": "two smiling faces and balloons",
    "health": "a heart with a medical cross",
}

_REQUIREMENTS = """
    Important requirements:
    1. NO TEXT OR WRITING in the image
    2. Use a bright, solid color background
    3. Create a clean, minimal design that's clearly visible at small sizes
    4. The image should visually represent the action or object in the task
    5. Use a modern, flat design style with simple shapes and bold colors

    This will be used as a small task icon in a scheduling application."""


def normalize_description(description: str) -> str:
    return (description or "").strip().lower()


def build_image_prompt(description: str, classifier: Optional[TaskClassifier] = None) -> str:
    category = (classifier or TaskClassifier()).category(description)
    concept = IMAGE_CONCEPTS.get(category.key)
    if concept:
        subject = f"{concept}, standing for the task category \"{category.name.lower()}\""
    else:
        subject = f"the task: \"{description.strip()}\""
    return f"Create a simple, colorful icon representing {subject}.\n{_REQUIREMENTS}"


def placeholder_url(category: TaskCategory) -> str:
    return f"{PLACEHOLDER_BASE_URL}/{category.color}/white?text={quote(category.label)}"


def fallback_image_url(description: str, classifier: Optional[TaskClassifier] = None) -> str:
    """Solid category colour plus the category label. Same input, same URL."""
    return placeholder_url((classifier or TaskClassifier()).category(description))


class ImageService:
    def __init__(
        self,
        client: OpenAIImageClient,
        use_mock: bool = False,
        classifier: Optional[TaskClassifier] = None,
    ):
        self.client = client
        self.use_mock = use_mock
        self.classifier = classifier or TaskClassifier()
        self._cache: Dict[str, str] = {}
        self._in_flight: Dict[str, asyncio.Task] = {}

    @classmethod
    def from_config(cls, config: ApiConfig, transport=None) -> "ImageService":
        client = OpenAIImageClient(
            api_key=config.image_api_key,
            model=config.image_model,
            base_url=config.openai_base_url,
            timeout_s=config.image_timeout_s,
            transport=transport,
        )
        return cls(client, use_mock=config.use_mock_images)

    def fallback_url(self, description: str) -> str:
        return fallback_image_url(description, self.classifier)

    async def generate_image(self, description: str) -> ImageResult:
        if not description or not description.strip():
            raise InvalidRequestError("Task description is required")

        if self.use_mock:
            logger.info("Using mock image response")
            return ImageResult(image_url=self.fallback_url(description), is_mock=True)

        logger.info(f"Generating image for task: {description!r}")
        url = await self.client.generate(build_image_prompt(description, self.classifier))
        logger.info("Successfully generated image for task")
        return ImageResult(image_url=url, is_mock=False)

    async def _fetch(self, description: str) -> str:
        try:
            result = await self.generate_image(description)
        except PlannerError as e:
            logger.warning(f"Image generation failed: {e}. Using fallback.")
            return self.fallback_url(description)
        if result.is_mock:
            return self.fallback_url(description)
        return result.image_url

    async def _resolve(self, key: str, description: str) -> str:
        try:
            url = await self._fetch(description)
        except Exception as e:
            logger.error(f"Error in get_task_image: {e}")
            url = self.fallback_url(description)
        self._cache[key] = url
        return url

    async def get_task_image(self, description: str) -> str:
        key = normalize_description(description)
        if not key:
            return self.fallback_url("Task")

        if key in self._cache:
            return self._cache[key]

        # Callers only shield-await the shared fetch task: cancelling one caller
        # leaves the fetch running for everyone else waiting on the same key.
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._resolve(key, description))
            self._in_flight[key] = task
            task.add_done_callback(lambda _t, k=key: self._in_flight.pop(k, None))
        return await asyncio.shield(task)

    def cached(self, description: str) -> Optional[str]:
        return self._cache.get(normalize_description(description))

    @property
    def cache_size(self) -> int:
        return len(self._cache)
