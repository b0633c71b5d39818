"""HTTP handlers for improve and cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error translation.
"""

import logging

from fastapi import HTTPException, status

from portfolio_ai.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    ImproveRequest,
    ImproveResponse,
)
from portfolio_ai.entities import Domain
from portfolio_ai.errors import (
    ConfigurationError,
    GatewayError,
    InputValidationError,
    InvalidProviderRequestError,
    ProviderUnavailableError,
)
from portfolio_ai.services import ImproveService

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[GatewayError], int] = {
    InputValidationError: 422,
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ProviderUnavailableError: status.HTTP_502_BAD_GATEWAY,
    InvalidProviderRequestError: status.HTTP_502_BAD_GATEWAY,
}


def _status_for(error: GatewayError) -> int:
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ImproveHandler:
    """HTTP handlers for improve operations.

    This handler delegates business logic to ImproveService
    and handles HTTP-specific concerns like:
    - Converting DTOs to entities and back
    - Mapping gateway errors to status codes

    Example:
        ```python
        handler = ImproveHandler(improve_service=service)

        @app.post("/api/ai/cv/improve", response_model=ImproveResponse)
        async def improve_cv(request: ImproveRequest):
            return await handler.improve(Domain.CV, request)
        ```
    """

    def __init__(self, improve_service: ImproveService) -> None:
        """Initialize the improve handler.

        Args:
            improve_service: The service for business logic (required).
        """
        self._service = improve_service

    async def improve(self, domain: Domain, request: ImproveRequest) -> ImproveResponse:
        """Handle POST /api/ai/{domain}/improve requests.

        Args:
            domain: Domain fixed by the route
            request: The improve request DTO

        Returns:
            ImproveResponse with exactly three highlights

        Raises:
            HTTPException: 422 for blank text, 503 when the provider is not
                configured, 502 when the provider fails
        """
        try:
            result = await self._service.improve(domain, request.to_entity())
        except GatewayError as e:
            code = _status_for(e)
            logger.error("Improve %s failed with %d: %s", domain.value, code, e.message)
            raise HTTPException(status_code=code, detail=e.message) from e

        return ImproveResponse.from_entity(result)

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests."""
        stats = self._service.get_stats()
        cache_stats = stats["cache"]

        return CacheStatsResponse(
            total_entries=cache_stats.get("total_entries", 0),
            live_entries=cache_stats.get("live_entries", 0),
            ttl_seconds=cache_stats.get("ttl", 0),
            capacity=cache_stats.get("capacity", 0),
            model=cache_stats.get("model", ""),
            performance=stats["performance"],
        )

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /cache requests."""
        count = self._service.clear_cache()
        logger.info("Cache cleared: %d entries removed", count)

        return CacheClearResponse(
            success=True,
            deleted_count=count,
            message="Cache cleared successfully",
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        configured = self._service.is_healthy()

        return HealthCheckResponse(
            status="healthy" if configured else "degraded",
            provider_configured=configured,
            model=self._service.provider.model_name,
        )
