"""Portfolio AI Gateway - AI text improvement for portfolio content.

This package provides a layered architecture for improving CV, project
and certificate descriptions through an LLM provider:

Layers:
    - protocols: Interface contracts (ResponseCache, CompletionProvider)
    - repositories: In-memory cache and OpenAI-compatible provider
    - services: Orchestration (normalize, cache, prompt, call, parse/fallback)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from portfolio_ai import ImproveService, InMemoryResponseCache, OpenAICompletionProvider

    service = ImproveService.create(
        cache=InMemoryResponseCache.create(),
        provider=OpenAICompletionProvider.create(),
    )
    result = await service.improve(Domain.CV, ImproveRequestEntity(text="..."))
    ```

For HTTP API:
    ```python
    from portfolio_ai.api.app import app
    ```
"""

from portfolio_ai.config import get_settings, settings
from portfolio_ai.dto import ImproveRequest, ImproveResponse
from portfolio_ai.entities import Domain, ImproveRequestEntity, ImproveResultEntity
from portfolio_ai.errors import (
    ConfigurationError,
    GatewayError,
    InputValidationError,
    InvalidProviderRequestError,
    MalformedResponseError,
    ProviderUnavailableError,
)
from portfolio_ai.handlers import ImproveHandler
from portfolio_ai.protocols import CompletionProvider, ResponseCache
from portfolio_ai.repositories import InMemoryResponseCache, OpenAICompletionProvider
from portfolio_ai.services import ImproveService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "ResponseCache",
    "CompletionProvider",
    # Services (business logic)
    "ImproveService",
    # Handlers (HTTP)
    "ImproveHandler",
    # Repositories (data access)
    "InMemoryResponseCache",
    "OpenAICompletionProvider",
    # Entities (domain models)
    "Domain",
    "ImproveRequestEntity",
    "ImproveResultEntity",
    # DTOs (API contracts)
    "ImproveRequest",
    "ImproveResponse",
    # Errors
    "GatewayError",
    "InputValidationError",
    "ConfigurationError",
    "ProviderUnavailableError",
    "InvalidProviderRequestError",
    "MalformedResponseError",
]
