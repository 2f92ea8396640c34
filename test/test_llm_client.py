import asyncio

import pytest

from llm.llm_client import LLMClient, build_provider
from llm.prompts import SYSTEM_PROMPT, build_schedule_prompt
from llm.providers.anthropic_provider import AnthropicProvider
from llm.providers.openai_provider import OpenAIProvider
from planner_ai.errors import ProviderTimeoutError
from planner_ai.models import ApiConfig, Task

TASKS = [Task(id="1", description="Eat breakfast"), Task(id="2", description="Finish report")]


def test_generate_schedule(fake_provider_factory):
    provider = fake_provider_factory(
        "EXPLANATION: Fuel first.\nSCHEDULE:\n8:00 AM: Eat breakfast\n9:00 AM: Finish report"
    )
    client = LLMClient(provider=provider)
    out = asyncio.run(client.generate_schedule(TASKS))
    assert out.explanation == "Fuel first."
    assert [i.task_description for i in out.schedule] == ["Eat breakfast", "Finish report"]
    assert len(provider.calls) == 1
    assert provider.calls[0]["system"] == SYSTEM_PROMPT


def test_prompt_lists_tasks_in_order_and_asks_for_format():
    prompt = build_schedule_prompt(TASKS)
    assert "Given these tasks:\n- Eat breakfast\n- Finish report\n" in prompt
    assert "EXPLANATION: [Your explanation" in prompt
    assert "SCHEDULE:\n[Time]: [Task description with category-specific words]" in prompt


def test_prompt_is_deterministic():
    assert build_schedule_prompt(TASKS) == build_schedule_prompt(list(TASKS))


def test_timeout_cancels_slow_provider(fake_provider_factory):
    provider = fake_provider_factory("never seen", delay_s=5.0)
    client = LLMClient(provider=provider, timeout_s=0.05)
    with pytest.raises(ProviderTimeoutError) as exc:
        asyncio.run(client.generate_schedule(TASKS))
    assert exc.value.status_code == 504
    assert provider.cancelled, "the slow call must be cancelled, not left running"


def test_build_provider_dispatch():
    assert isinstance(build_provider(ApiConfig(api_provider="openai")), OpenAIProvider)
    anthropic = build_provider(ApiConfig(api_provider="anthropic", anthropic_timeout_s=12))
    assert isinstance(anthropic, AnthropicProvider)
    assert LLMClient(anthropic).timeout_s == 12
