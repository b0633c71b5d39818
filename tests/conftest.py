"""
Shared fixtures for the gateway tests.
"""

import json
from collections.abc import Callable

import httpx
import pytest

from portfolio_ai.entities import PromptPair, ProviderReply
from portfolio_ai.errors import ConfigurationError
from portfolio_ai.repositories import InMemoryResponseCache, OpenAICompletionProvider
from portfolio_ai.services import ImproveService


class FakeClock:
    """Controllable Unix clock."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """CompletionProvider returning queued replies or raising queued errors."""

    def __init__(self, *outcomes: ProviderReply | Exception, configured: bool = True) -> None:
        self._outcomes = list(outcomes)
        self.configured = configured
        self.calls: list[PromptPair] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    @property
    def is_configured(self) -> bool:
        return self.configured

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("OPENAI_API_KEY is not configured on backend.")

    async def complete(self, prompts: PromptPair) -> ProviderReply:
        self.calls.append(prompts)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Async sleep replacement that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def completion_body(content: str | dict | None) -> dict:
    """Build a chat-completions envelope around ``content``."""
    if isinstance(content, dict):
        content = json.dumps(content)
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class ScriptedTransport:
    """Builds an httpx.MockTransport that replays responses in order."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        # Fresh copy so a repeated response is never sent twice
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=response.content,
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> InMemoryResponseCache:
    return InMemoryResponseCache(ttl=1200, capacity=400, hard_capacity=0, clock=clock)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_provider(sleep) -> Callable[..., OpenAICompletionProvider]:
    """Factory for a real provider wired to a scripted transport."""

    def _make(
        scripted: ScriptedTransport,
        api_key: str = "sk-test",
        max_retries: int = 2,
    ) -> OpenAICompletionProvider:
        return OpenAICompletionProvider(
            api_key=api_key,
            base_url="https://llm.example.test/v1/",
            model_name="gpt-test",
            max_retries=max_retries,
            temperature=0.35,
            transport=scripted.transport,
            sleep=sleep,
        )

    return _make


@pytest.fixture
def make_service(cache) -> Callable[..., ImproveService]:
    def _make(provider) -> ImproveService:
        return ImproveService(cache=cache, provider=provider)

    return _make
