import asyncio
import json

import httpx
import pytest

from planner_ai.models import ApiConfig


class FakeProvider:
    name = "Fake"
    timeout_s = 5.0

    def __init__(self, response_text: str = "", delay_s: float = 0.0, error: Exception = None):
        self._response_text = response_text
        self._delay_s = delay_s
        self._error = error
        self.calls = []
        self.cancelled = False

    async def generate(self, *, system: str, user: str) -> str:
        self.calls.append({"system": system, "user": user})
        if self._delay_s:
            try:
                await asyncio.sleep(self._delay_s)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self._error is not None:
            raise self._error
        return self._response_text


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it answered."""

    def __init__(self, handler):
        self.requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def json_bodies(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str = "", **kwargs):
        return FakeProvider(response_text, **kwargs)
    return _make


@pytest.fixture
def transport_factory():
    def _make(handler):
        return RecordingTransport(handler)
    return _make


@pytest.fixture
def api_config():
    return ApiConfig(
        api_key="sk-test",
        image_api_key="sk-test",
        rate_limit_report_delay_s=0.0,
    )


OPENAI_REPLY = (
    "EXPLANATION: Breakfast first, then focused work.\n\n"
    "SCHEDULE:\n"
    "8:00 AM: Eat breakfast\n"
    "9:00 AM: Work on the quarterly report\n"
)


def openai_chat_response(content: str = OPENAI_REPLY, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"choices": [{"message": {"content": content}}]})


def anthropic_messages_response(content: str = OPENAI_REPLY) -> httpx.Response:
    return httpx.Response(200, json={"content": [{"type": "text", "text": content}]})


def error_response(status_code: int, message: str) -> httpx.Response:
    return httpx.Response(status_code, json={"error": {"message": message}})
