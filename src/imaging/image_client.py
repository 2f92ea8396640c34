"""OpenAI image-generation client.

Sends one prompt, returns one image URL. Errors follow the same taxonomy as
the schedule providers (missing key, auth, quota, rate limit, timeout).
"""
from __future__ import annotations

from typing import Optional

import httpx

from llm.transport import post_json, run_with_timeout
from planner_ai.errors import EmptyResponseError, missing_key_error


class OpenAIImageClient:
    name = "OpenAI"

    def __init__(
        self,
        api_key: str,
        model: str = "dall-e-3",
        base_url: str = "https://api.openai.com/v1",
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key.strip()
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    async def _request(self, prompt: str) -> str:
        url = f"{self.base_url}/images/generations"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": "1024x1024",
            "quality": "standard",
            "style": "vivid",
        }

        data = await post_json(
            url,
            headers=headers,
            payload=payload,
            provider=self.name,
            timeout_s=self.timeout_s,
            transport=self._transport,
        )

        try:
            image_url = data["data"][0]["url"]
        except (KeyError, IndexError, TypeError):
            image_url = None
        if not image_url:
            raise EmptyResponseError(f"Received empty response from {self.name}")
        return image_url

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise missing_key_error(self.name)
        return await run_with_timeout(self._request(prompt), self.timeout_s, self.name)
