"""Improve request domain entities."""

from dataclasses import dataclass
from enum import Enum


class Domain(str, Enum):
    """Kind of portfolio text being improved.

    Selects the system prompt variant; the rest of the pipeline is the same.
    """

    CV = "CV"
    PROJECT = "PROJECT"
    CERTIFICATE = "CERTIFICATE"


@dataclass(frozen=True)
class ImproveRequestEntity:
    """Raw improve request as received from a caller.

    Attributes:
        text: Source text to improve
        context: Optional free-text hint (role, audience, stack)
        language: Optional language tag, "ru" or "en"
    """

    text: str
    context: str | None = None
    language: str | None = None


@dataclass(frozen=True)
class NormalizedInput:
    """Clamped, canonical form of a request.

    Used both for prompting and for building the cache key.

    Attributes:
        text: Trimmed source text, at most 5000 characters
        context: Trimmed context, at most 1200 characters, "none" when absent
        language: One of "ru", "en", "auto"
    """

    text: str
    context: str
    language: str
