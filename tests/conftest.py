"""
Shared fixtures: a controllable clock and a fake completion API.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from config.settings import Settings
from forecaster.client import CompletionClient


def completion(content, status_code=200):
    """Build an OpenAI-style chat completion response."""
    return httpx.Response(
        status_code,
        json={"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]},
    )


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeUpstream:
    """Records every request and answers with ``responder``."""

    def __init__(self):
        self.requests = []
        self.responder = lambda request: completion("CURRENT CONDITIONS\nSunny, 72F")

    def handle(self, request):
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self):
        return httpx.MockTransport(self.handle)

    @property
    def calls(self):
        return len(self.requests)

    def payload(self, index=-1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return Settings(
        openrouter_api_key="sk-or-test",
        openrouter_base_url="https://openrouter.ai/api/v1",
        app_env="test",
        public_app_url="https://weather.example.com",
        weather_model="openai/chatgpt-4o-latest",
        suggest_model="openai/gpt-4.1-nano",
        weather_cache_ttl=900.0,
        suggest_cache_ttl=86400.0,
    )


@pytest.fixture
def completion_client(settings, upstream):
    return CompletionClient(settings=settings, transport=upstream.transport)


@pytest.fixture
def client(settings, clock, upstream):
    """Create test client."""
    return TestClient(create_app(settings=settings, clock=clock, transport=upstream.transport))
