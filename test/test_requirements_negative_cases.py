import asyncio

import pytest
from planner_ai.errors import InvalidRequestError
from planner_ai.models import ApiConfig, Task
from llm.llm_client import LLMClient

def test_task_empty_description():
    with pytest.raises(Exception):
        Task(description="")

def test_task_blank_description():
    with pytest.raises(Exception):
        Task(description="   ")

def test_config_rejects_non_positive_timeout():
    with pytest.raises(Exception):
        ApiConfig(openai_timeout_s=0)

def test_llm_client_rejects_empty_task_list(fake_provider_factory):
    provider = fake_provider_factory("irrelevant")
    client = LLMClient(provider=provider)
    with pytest.raises(InvalidRequestError):
        asyncio.run(client.generate_schedule([]))
    assert provider.calls == []
