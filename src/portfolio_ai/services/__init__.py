"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Cache / Provider)

Usage:
    ```python
    from portfolio_ai.services import ImproveService

    service = ImproveService.create(cache=cache, provider=provider)
    result = await service.improve(Domain.PROJECT, request)
    ```
"""

from .improve_service import ImproveService

__all__ = [
    "ImproveService",
]
