"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from portfolio_ai.entities import ImproveResultEntity


class ImproveResponse(BaseModel):
    """Response DTO for the improve endpoints (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    improved_text: str = Field(..., alias="improvedText", description="Rewritten text")
    summary: str = Field(..., description="Short note on what was changed")
    highlights: list[str] = Field(
        ...,
        description="Exactly three key points",
        min_length=3,
        max_length=3,
    )

    @classmethod
    def from_entity(cls, entity: ImproveResultEntity) -> "ImproveResponse":
        return cls(
            improved_text=entity.improved_text,
            summary=entity.summary,
            highlights=list(entity.highlights),
        )


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Stored entries, expired ones included", ge=0)
    live_entries: int = Field(..., description="Entries still within their TTL", ge=0)
    ttl_seconds: float = Field(..., description="Time-to-live for cache entries in seconds", ge=0)
    capacity: int = Field(..., description="Entry count that triggers an expiry sweep", ge=0)
    model: str = Field(..., description="Configured provider model")
    performance: dict[str, Any] = Field(
        default_factory=dict,
        description="Request counters since start or last clear",
    )


class CacheClearResponse(BaseModel):
    """Response DTO for clearing the cache."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., description="Number of entries removed", ge=0)
    message: str = Field(..., description="Human-readable status message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    provider_configured: bool = Field(..., description="Whether a provider API key is set")
    model: str = Field(..., description="Configured provider model")
