"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Cache, provider, service and handler created once in lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from portfolio_ai.handlers import ImproveHandler
from portfolio_ai.repositories import InMemoryResponseCache, OpenAICompletionProvider
from portfolio_ai.services import ImproveService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ImproveHandler:
    """Dependency injection for ImproveHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ImproveHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "improve_handler", None)
    if handler is None:
        raise RuntimeError("ImproveHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Cache and provider (data access) - created explicitly
    2. Service (business logic) - stored in app.state.improve_service
    3. Handler (HTTP endpoints) - stored in app.state.improve_handler

    The API key is not checked here; a missing key fails the first
    improve call instead.

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the provider HTTP client and removes all services from app.state
    """
    cache = InMemoryResponseCache.create()
    provider = OpenAICompletionProvider.create()

    improve_service = ImproveService.create(cache=cache, provider=provider)
    improve_handler = ImproveHandler(improve_service=improve_service)

    app.state.response_cache = cache
    app.state.completion_provider = provider
    app.state.improve_service = improve_service
    app.state.improve_handler = improve_handler

    logger.info("Improve service initialized (model=%s)", provider.model_name)
    logger.info("Cache TTL: %ss, capacity: %d", cache.ttl, cache.capacity)
    if not provider.is_configured:
        logger.warning("OPENAI_API_KEY is not set; improve requests will fail until it is")
    logger.debug("Provider endpoint: %s (max retries %d)", provider.endpoint, provider.max_retries)

    yield

    await provider.close()
    del app.state.improve_handler
    del app.state.improve_service
    del app.state.completion_provider
    del app.state.response_cache
    logger.info("Improve service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ImproveHandler, Depends(get_handler)]
