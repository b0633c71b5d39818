"""Repository layer for data access.

This layer abstracts external dependencies (the LLM provider API and the
response store) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (in-memory -> shared store, OpenAI -> proxy)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from portfolio_ai.protocols import CompletionProvider, ResponseCache

from .memory_cache_repository import InMemoryResponseCache
from .openai_completion_provider import OpenAICompletionProvider, backoff_delay

__all__ = [
    "CompletionProvider",
    "ResponseCache",
    "InMemoryResponseCache",
    "OpenAICompletionProvider",
    "backoff_delay",
]
