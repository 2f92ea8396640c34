from __future__ import annotations
from typing import Optional

import httpx

from llm.transport import post_json
from planner_ai.errors import EmptyResponseError, missing_key_error
from .base import LLMProvider


class OpenAIProvider(LLMProvider):
    name = "OpenAI"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: str = "https://api.openai.com/v1",
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key.strip()
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    async def generate(self, *, system: str, user: str) -> str:
        if not self.api_key:
            raise missing_key_error(self.name)

        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": 0.7,
            "max_tokens": 800,
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
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            raise EmptyResponseError(f"Received empty response from {self.name}")
        return content
