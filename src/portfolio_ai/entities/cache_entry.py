"""Cache entry domain entity."""

from dataclasses import dataclass

from .improve_result import ImproveResultEntity


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached improvement result.

    Attributes:
        response: The cached result
        saved_at: When this entry was stored (Unix timestamp)
    """

    response: ImproveResultEntity
    saved_at: float

    def is_expired(self, now: float, ttl: float) -> bool:
        """An entry stays valid while its age does not exceed the TTL."""
        return now - self.saved_at > ttl
