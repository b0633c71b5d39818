"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ImproveRequest
from .responses import CacheClearResponse, CacheStatsResponse, HealthCheckResponse, ImproveResponse

__all__ = [
    "ImproveRequest",
    "ImproveResponse",
    "CacheStatsResponse",
    "CacheClearResponse",
    "HealthCheckResponse",
]
