from __future__ import annotations
from typing import Optional

import httpx

from llm.transport import post_json
from planner_ai.errors import EmptyResponseError, missing_key_error
from .base import LLMProvider

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(LLMProvider):
    name = "Anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-opus-20240229",
        base_url: str = "https://api.anthropic.com/v1",
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key.strip()
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    async def generate(self, *, system: str, user: str) -> str:
        # The messages endpoint gets the prompt alone, as a single user turn.
        if not self.api_key:
            raise missing_key_error(self.name)

        url = f"{self.base_url}/messages"
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "max_tokens": 800,
            "messages": [
                {"role": "user", "content": user},
            ],
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
            content = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            raise EmptyResponseError(f"Received empty response from {self.name}")
        return content
