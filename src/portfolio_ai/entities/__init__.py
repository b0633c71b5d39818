"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .cache_entry import CacheEntryEntity
from .improve_request import Domain, ImproveRequestEntity, NormalizedInput
from .improve_result import ImproveResultEntity, PromptPair, ProviderReply

__all__ = [
    "CacheEntryEntity",
    "Domain",
    "ImproveRequestEntity",
    "ImproveResultEntity",
    "NormalizedInput",
    "PromptPair",
    "ProviderReply",
]
