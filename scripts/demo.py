#!/usr/bin/env python3
"""
Demo script for the portfolio AI gateway.

Improves a sample CV summary, project description and certificate
description against the configured provider (OPENAI_API_KEY, OPENAI_MODEL,
OPENAI_BASE_URL), then repeats one request to show the cache at work.
"""

import asyncio
import time

from portfolio_ai import (
    Domain,
    GatewayError,
    ImproveRequestEntity,
    ImproveService,
    InMemoryResponseCache,
    OpenAICompletionProvider,
)

SAMPLES = [
    (
        Domain.CV,
        ImproveRequestEntity(
            text="backend dev 5 years. did java and python services, mentored juniors",
            context="Senior backend engineer application",
            language="en",
        ),
    ),
    (
        Domain.PROJECT,
        ImproveRequestEntity(
            text="Сервис для учета заявок. Spring Boot, PostgreSQL; интеграция с GitHub",
            language="ru",
        ),
    ),
    (
        Domain.CERTIFICATE,
        ImproveRequestEntity(text="AWS Solutions Architect Associate, passed 2024"),
    ),
]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_improve(service: ImproveService) -> None:
    """Improve one sample per domain."""
    print_section("Improving Portfolio Text")

    for domain, request in SAMPLES:
        start = time.time()
        try:
            result = await service.improve(domain, request)
        except GatewayError as e:
            print(f"\n  [{domain.value}] ✗ {e.message}")
            continue
        duration = (time.time() - start) * 1000

        print(f"\n  [{domain.value}] {duration:.0f}ms")
        print(f"  Improved: {result.improved_text[:100]}")
        print(f"  Summary: {result.summary}")
        for highlight in result.highlights:
            print(f"    • {highlight}")


async def demo_cache(service: ImproveService) -> None:
    """Repeat a request to show it is served from the cache."""
    print_section("Cache Behaviour")

    domain, request = SAMPLES[0]
    start = time.time()
    try:
        await service.improve(domain, request)
    except GatewayError as e:
        print(f"\n  ✗ {e.message}")
        return
    duration = (time.time() - start) * 1000

    print(f"\n  Repeated {domain.value} request in {duration:.2f}ms")
    stats = service.get_stats()
    print(f"  Cache entries: {stats['cache']['total_entries']}")
    print(f"  Hit rate: {stats['performance']['hit_rate']:.0%}")


async def main() -> None:
    provider = OpenAICompletionProvider.create()
    service = ImproveService.create(cache=InMemoryResponseCache.create(), provider=provider)

    print(f"Model: {provider.model_name}")
    print(f"Endpoint: {provider.endpoint}")

    try:
        await demo_improve(service)
        await demo_cache(service)
    finally:
        await provider.close()


if __name__ == "__main__":
    asyncio.run(main())
