"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the in-memory cache or the OpenAI-compatible client
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from portfolio_ai.protocols import CompletionProvider, ResponseCache

    cache: ResponseCache = InMemoryResponseCache()
    provider: CompletionProvider = OpenAICompletionProvider.create()
    ```
"""

from .completion_provider import CompletionProvider
from .response_cache import ResponseCache

__all__ = [
    "CompletionProvider",
    "ResponseCache",
]
