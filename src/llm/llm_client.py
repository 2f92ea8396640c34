from __future__ import annotations

import logging
from typing import Optional, Sequence

import httpx

from llm.prompts import SYSTEM_PROMPT, build_schedule_prompt
from llm.providers.anthropic_provider import AnthropicProvider
from llm.providers.base import LLMProvider
from llm.providers.openai_provider import OpenAIProvider
from llm.response_parser import parse_schedule_response
from llm.transport import run_with_timeout
from planner_ai.errors import InvalidRequestError
from planner_ai.models import ApiConfig, PlannerResponse, Task

logger = logging.getLogger(__name__)


def build_provider(
    config: ApiConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LLMProvider:
    """Pick the one upstream named by ``config.api_provider``."""
    if config.api_provider == "anthropic":
        return AnthropicProvider(
            api_key=config.api_key,
            model=config.anthropic_model,
            base_url=config.anthropic_base_url,
            timeout_s=config.anthropic_timeout_s,
            transport=transport,
        )
    return OpenAIProvider(
        api_key=config.api_key,
        model=config.openai_model,
        base_url=config.openai_base_url,
        timeout_s=config.openai_timeout_s,
        transport=transport,
    )


class LLMClient:
    """Prompt building, the timed upstream call and reply parsing.

    Providers only move text; everything schedule-specific lives here so both
    upstreams behave identically.
    """

    def __init__(self, provider: LLMProvider, timeout_s: Optional[float] = None):
        self.provider = provider
        self.timeout_s = timeout_s if timeout_s is not None else getattr(provider, "timeout_s", 30.0)

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "LLMClient":
        return cls(build_provider(config, transport=transport))

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "name", type(self.provider).__name__)

    async def complete(self, prompt: str) -> str:
        return await run_with_timeout(
            self.provider.generate(system=SYSTEM_PROMPT, user=prompt),
            self.timeout_s,
            self.provider_name,
        )

    async def generate_schedule(self, tasks: Sequence[Task]) -> PlannerResponse:
        if not tasks:
            raise InvalidRequestError(
                "Tasks array is required and must not be empty",
                "Please add at least one task.",
            )

        logger.info(f"Generating schedule for {len(tasks)} tasks via {self.provider_name}")
        text = await self.complete(build_schedule_prompt(tasks))
        response = parse_schedule_response(text)

        if not response.schedule:
            logger.warning(f"{self.provider_name} reply contained no schedule lines")
        return response
