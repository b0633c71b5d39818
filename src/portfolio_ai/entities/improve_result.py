"""Improve result and provider exchange entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImproveResultEntity:
    """Normalized improvement result.

    Attributes:
        improved_text: Rewritten text (or the cleaned source on fallback)
        summary: One-line note on what was done
        highlights: Exactly three key points
    """

    improved_text: str
    summary: str
    highlights: tuple[str, str, str]

    def __post_init__(self) -> None:
        if len(self.highlights) != 3:
            raise ValueError(f"highlights must have exactly 3 items, got {len(self.highlights)}")


@dataclass(frozen=True)
class PromptPair:
    """System instruction and user message sent to the provider."""

    system: str
    user: str


@dataclass(frozen=True)
class ProviderReply:
    """Outcome of a non-fatal provider call.

    Attributes:
        content: Message content, None when the provider returned none
        rate_limited: True when retries ran out on 429 responses
        attempts: Number of HTTP attempts made
    """

    content: str | None
    rate_limited: bool = False
    attempts: int = 1

    @property
    def has_content(self) -> bool:
        return bool(self.content and self.content.strip())
