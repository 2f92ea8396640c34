import asyncio

import pytest

from llm.llm_client import LLMClient
from llm.response_parser import DEFAULT_EXPLANATION
from planner_ai.errors import QuotaError
from planner_ai.models import Task

def test_llm_garbage_output_gives_empty_schedule(fake_provider_factory):
    provider = fake_provider_factory("THIS IS NOT A SCHEDULE AT ALL")
    client = LLMClient(provider=provider)
    out = asyncio.run(client.generate_schedule([Task(description="Anything")]))
    assert out.schedule == []
    assert out.explanation == DEFAULT_EXPLANATION

def test_llm_extra_text_around_sections(fake_provider_factory):
    provider = fake_provider_factory(
        "Sure! Here you go.\nEXPLANATION: Short day.\nSCHEDULE:\n10 AM - Call mom\nHope this helps!"
    )
    client = LLMClient(provider=provider)
    out = asyncio.run(client.generate_schedule([Task(description="Call mom")]))
    assert out.explanation == "Short day."
    assert len(out.schedule) == 1
    assert out.schedule[0].time == "10 AM"

def test_provider_errors_propagate_unchanged(fake_provider_factory):
    provider = fake_provider_factory(error=QuotaError("OpenAI billing issue"))
    client = LLMClient(provider=provider)
    with pytest.raises(QuotaError):
        asyncio.run(client.generate_schedule([Task(description="Anything")]))
    assert len(provider.calls) == 1
