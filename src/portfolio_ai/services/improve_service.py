"""Improve service for core business logic.

This service orchestrates a text improvement by coordinating the
normalizer, the response cache, the prompt builder, the completion
provider and the parser/fallback pair.
"""

import logging
import time

from portfolio_ai.entities import Domain, ImproveRequestEntity, ImproveResultEntity
from portfolio_ai.errors import GatewayError, InputValidationError, MalformedResponseError
from portfolio_ai.fallback import build_fallback
from portfolio_ai.models import GatewayMetrics
from portfolio_ai.normalizer import build_cache_key, normalize
from portfolio_ai.parser import parse_completion
from portfolio_ai.prompts import build_prompts
from portfolio_ai.protocols import CompletionProvider, ResponseCache

logger = logging.getLogger(__name__)


class ImproveService:
    """Core improvement orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ResponseCache: in-memory by default
    - CompletionProvider: any OpenAI-compatible endpoint, or a fake in tests

    Concurrent identical requests that miss the cache each reach the
    provider; there is no in-flight deduplication.

    Example:
        ```python
        from portfolio_ai.repositories import InMemoryResponseCache, OpenAICompletionProvider
        from portfolio_ai.services import ImproveService

        service = ImproveService.create(
            cache=InMemoryResponseCache.create(),
            provider=OpenAICompletionProvider.create(),
        )
        result = await service.improve_cv(ImproveRequestEntity(text="Built APIs"))
        ```
    """

    def __init__(
        self,
        cache: ResponseCache,
        provider: CompletionProvider,
        metrics: GatewayMetrics | None = None,
    ) -> None:
        """Initialize the improve service.

        Args:
            cache: Response cache shared by all requests (required).
            provider: Completion provider (required).
            metrics: Counters; a fresh instance when None.
        """
        self._cache = cache
        self._provider = provider
        self._metrics = metrics or GatewayMetrics()

    @classmethod
    def create(
        cls,
        cache: ResponseCache,
        provider: CompletionProvider,
    ) -> "ImproveService":
        """Factory method to create ImproveService.

        Args:
            cache: Response cache (required).
            provider: Completion provider (required).

        Returns:
            Configured ImproveService instance
        """
        return cls(cache=cache, provider=provider)

    async def improve(self, domain: Domain, request: ImproveRequestEntity) -> ImproveResultEntity:
        """Improve a piece of portfolio text.

        Business logic:
        1. Reject blank text and a missing credential before any I/O
        2. Normalize the request and look it up in the cache
        3. On a miss, prompt the provider
        4. Parse the content, or fall back to local extraction when it is
           absent, rate limited or malformed
        5. Cache the result and return it

        Args:
            domain: Kind of text being improved
            request: The raw request

        Returns:
            ImproveResultEntity with exactly three highlights

        Raises:
            InputValidationError: If the text is blank
            ConfigurationError: If the provider has no credential
            ProviderUnavailableError: On persistent provider failures
            InvalidProviderRequestError: If the provider rejected the request
        """
        if not request.text or not request.text.strip():
            raise InputValidationError("Text is required")

        self._provider.ensure_configured()

        normalized = normalize(request)
        key = build_cache_key(domain, normalized)

        cached = self._cache.get(key)
        if cached is not None:
            self._metrics.record_hit()
            logger.debug("Cache hit for %s request (%d chars)", domain.value, len(normalized.text))
            return cached

        self._metrics.record_miss()
        prompts = build_prompts(domain, normalized)

        start_time = time.time()
        try:
            reply = await self._provider.complete(prompts)
        except GatewayError:
            self._metrics.record_failure()
            raise
        self._metrics.record_provider_call((time.time() - start_time) * 1000)

        if reply.has_content:
            try:
                result = parse_completion(reply.content, normalized)
            except MalformedResponseError as e:
                logger.warning("Falling back for %s request: %s", domain.value, e)
                self._metrics.record_fallback(rate_limited=False)
                result = build_fallback(normalized, rate_limited=False)
        else:
            logger.warning(
                "Falling back for %s request: %s",
                domain.value,
                "rate limited" if reply.rate_limited else "no content",
            )
            self._metrics.record_fallback(rate_limited=True)
            result = build_fallback(normalized, rate_limited=True)

        self._cache.put(key, result)
        return result

    async def improve_cv(self, request: ImproveRequestEntity) -> ImproveResultEntity:
        return await self.improve(Domain.CV, request)

    async def improve_project(self, request: ImproveRequestEntity) -> ImproveResultEntity:
        return await self.improve(Domain.PROJECT, request)

    async def improve_certificate(self, request: ImproveRequestEntity) -> ImproveResultEntity:
        return await self.improve(Domain.CERTIFICATE, request)

    def clear_cache(self) -> int:
        """Clear all cached results and reset counters.

        Returns:
            Number of entries deleted
        """
        count = self._cache.clear()
        self._metrics = GatewayMetrics()
        return count

    def get_stats(self) -> dict:
        """Get cache statistics and request counters.

        Returns:
            Dictionary with cache and performance statistics
        """
        stats = self._cache.get_stats()
        stats["model"] = self._provider.model_name
        return {
            "cache": stats,
            "performance": self._metrics.to_dict(),
        }

    def is_healthy(self) -> bool:
        """Check if the service can serve provider-backed results.

        Returns:
            True if a provider credential is configured
        """
        return self._provider.is_configured

    @property
    def cache(self) -> ResponseCache:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def provider(self) -> CompletionProvider:
        """Get the underlying provider (for testing)."""
        return self._provider

    @property
    def metrics(self) -> GatewayMetrics:
        """Get the request counters."""
        return self._metrics
