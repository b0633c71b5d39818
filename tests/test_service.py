"""
Tests for the improve orchestration service.
"""

import asyncio

import httpx
import pytest

from conftest import FakeProvider, ScriptedTransport, completion_body
from portfolio_ai.entities import Domain, ImproveRequestEntity, ProviderReply
from portfolio_ai.errors import (
    ConfigurationError,
    InputValidationError,
    InvalidProviderRequestError,
    ProviderUnavailableError,
)

GOOD_CONTENT = '{"improvedText":"Built a tool.","summary":"Rewritten.","highlights":["Fast","Reliable"]}'
REQUEST = ImproveRequestEntity(text="built a tool", language="en")


def _improve(service, domain=Domain.CV, request=REQUEST):
    return asyncio.run(service.improve(domain, request))


def test_parsed_response(make_service):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    result = _improve(make_service(provider))
    assert result.improved_text == "Built a tool."
    assert result.summary == "Rewritten."
    assert result.highlights == ("Fast", "Reliable", "Key point 3")


def test_second_call_served_from_cache(make_service):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    service = make_service(provider)

    first = _improve(service)
    second = _improve(service, request=ImproveRequestEntity(text="  built a tool ", language="EN"))

    assert second is first
    assert len(provider.calls) == 1
    assert service.metrics.cache_hits == 1
    assert service.metrics.cache_misses == 1


def test_expired_entry_triggers_new_call(make_service, clock):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    service = make_service(provider)
    _improve(service)
    clock.advance(1201)
    _improve(service)
    assert len(provider.calls) == 2


def test_domains_never_share_cache(make_service):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    service = make_service(provider)
    for domain in Domain:
        _improve(service, domain=domain)
    assert len(provider.calls) == 3
    assert "Task domain: CERTIFICATE" in provider.calls[2].system


def test_domain_entry_points(make_service):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    service = make_service(provider)
    asyncio.run(service.improve_cv(REQUEST))
    asyncio.run(service.improve_project(REQUEST))
    asyncio.run(service.improve_certificate(REQUEST))
    domains = [call.user.splitlines()[0] for call in provider.calls]
    assert domains == ["DOMAIN: CV", "DOMAIN: PROJECT", "DOMAIN: CERTIFICATE"]


def test_malformed_content_falls_back_and_caches(make_service, cache):
    provider = FakeProvider(ProviderReply(content="this is not json"))
    service = make_service(provider)
    request = ImproveRequestEntity(
        text="Led backend migration. Reduced latency by 40%. Mentored two juniors.",
        language="en",
    )
    result = _improve(service, request=request)
    assert result.summary == "Description was improved and structured."
    assert result.highlights == (
        "Led backend migration",
        "Reduced latency by 40%",
        "Mentored two juniors",
    )
    assert cache.count_all() == 1
    assert service.metrics.malformed_fallbacks == 1


def test_absent_content_uses_rate_limited_fallback(make_service):
    provider = FakeProvider(ProviderReply(content=None))
    result = _improve(make_service(provider))
    assert result.summary == "AI rate limit reached (429). Local text processing was applied."


def test_rate_limited_scenario_end_to_end(make_provider, make_service, cache, sleep):
    """429 on both attempts with one retry yields a cached rate-limited fallback."""
    scripted = ScriptedTransport(httpx.Response(429))
    service = make_service(make_provider(scripted, max_retries=1))

    result = _improve(service, request=ImproveRequestEntity(text="Shipped release notes tool.", language="en"))

    assert len(scripted.requests) == 2
    assert sleep.delays == [0.9]
    assert result.summary == "AI rate limit reached (429). Local text processing was applied."
    assert result.improved_text == "Shipped release notes tool."
    assert len(result.highlights) == 3
    assert cache.count_all() == 1

    # Served from cache afterwards
    _improve(service, request=ImproveRequestEntity(text="Shipped release notes tool.", language="en"))
    assert len(scripted.requests) == 2


def test_success_scenario_end_to_end(make_provider, make_service):
    scripted = ScriptedTransport(httpx.Response(200, json=completion_body(GOOD_CONTENT)))
    result = _improve(make_service(make_provider(scripted)))
    assert result.highlights == ("Fast", "Reliable", "Key point 3")
    assert result.improved_text == "Built a tool."


def test_unavailable_provider_propagates_without_caching(make_provider, make_service, cache):
    scripted = ScriptedTransport(httpx.Response(503))
    service = make_service(make_provider(scripted, max_retries=2))
    with pytest.raises(ProviderUnavailableError):
        _improve(service)
    assert len(scripted.requests) == 3
    assert cache.count_all() == 0
    assert service.metrics.failures == 1


def test_invalid_request_propagates_without_caching(make_service, cache):
    provider = FakeProvider(InvalidProviderRequestError("bad request", status_code=400))
    with pytest.raises(InvalidProviderRequestError):
        _improve(make_service(provider))
    assert cache.count_all() == 0


def test_missing_credential_makes_no_calls(make_provider, make_service, cache):
    scripted = ScriptedTransport(httpx.Response(200, json=completion_body(GOOD_CONTENT)))
    service = make_service(make_provider(scripted, api_key=""))
    with pytest.raises(ConfigurationError):
        _improve(service)
    assert scripted.requests == []
    assert cache.count_all() == 0


def test_missing_credential_checked_before_cache(make_service, cache):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    service = make_service(provider)
    _improve(service)

    provider.configured = False
    with pytest.raises(ConfigurationError):
        _improve(service)
    assert len(provider.calls) == 1


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_text_rejected(make_service, text):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    with pytest.raises(InputValidationError):
        _improve(make_service(provider), request=ImproveRequestEntity(text=text))
    assert provider.calls == []


def test_long_input_is_truncated_in_prompt(make_service):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    request = ImproveRequestEntity(text="x" * 6000, context="y" * 1500)
    _improve(make_service(provider), request=request)
    user = provider.calls[0].user
    assert "x" * 5000 + "\n" in user
    assert "x" * 5001 not in user
    assert "CONTEXT: " + "y" * 1200 + "\n" in user


def test_concurrent_identical_misses_all_reach_provider(make_service):
    """No in-flight deduplication: concurrent misses each call the provider."""

    class SlowProvider(FakeProvider):
        async def complete(self, prompts):
            await asyncio.sleep(0)
            return await super().complete(prompts)

    provider = SlowProvider(ProviderReply(content=GOOD_CONTENT))
    service = make_service(provider)

    async def run_all():
        return await asyncio.gather(*(service.improve(Domain.CV, REQUEST) for _ in range(3)))

    results = asyncio.run(run_all())
    assert len(provider.calls) == 3
    assert all(result == results[0] for result in results)


def test_stats_and_clear(make_service, cache):
    provider = FakeProvider(ProviderReply(content=GOOD_CONTENT))
    service = make_service(provider)
    _improve(service)
    _improve(service)

    stats = service.get_stats()
    assert stats["cache"]["total_entries"] == 1
    assert stats["cache"]["model"] == "fake-model"
    assert stats["performance"]["cache_hits"] == 1
    assert stats["performance"]["provider_calls"] == 1

    assert service.clear_cache() == 1
    assert cache.count_all() == 0
    assert service.metrics.total_requests == 0
