"""Completion provider protocol.

Defines the interface for the outbound LLM call that rewrites text.
"""

from typing import Protocol, runtime_checkable

from portfolio_ai.entities import PromptPair, ProviderReply


@runtime_checkable
class CompletionProvider(Protocol):
    """Protocol for chat-completion providers."""

    @property
    def model_name(self) -> str:
        """Return the configured model identifier."""
        ...

    @property
    def is_configured(self) -> bool:
        """Return True if a credential is available."""
        ...

    def ensure_configured(self) -> None:
        """Fail fast when no credential is available.

        Raises:
            ConfigurationError: If the credential is missing
        """
        ...

    async def complete(self, prompts: PromptPair) -> ProviderReply:
        """Run one logical improve call, retries included.

        Args:
            prompts: System and user messages

        Returns:
            ProviderReply with content, or flagged as rate limited

        Raises:
            ConfigurationError: If the credential is missing
            ProviderUnavailableError: On persistent 5xx or transport failures
            InvalidProviderRequestError: On a non-retryable 4xx
        """
        ...
