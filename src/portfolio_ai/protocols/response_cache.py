"""Response cache protocol.

Defines the interface for a time-bounded store of improvement results
keyed by request fingerprint.
"""

from typing import Protocol, runtime_checkable

from portfolio_ai.entities import ImproveResultEntity


@runtime_checkable
class ResponseCache(Protocol):
    """Protocol for response cache backends.

    Implementations must be safe under concurrent access: callers do no
    locking of their own.
    """

    def get(self, key: str) -> ImproveResultEntity | None:
        """Look up a result.

        Args:
            key: The request fingerprint

        Returns:
            The cached result, or None if never stored or expired
        """
        ...

    def put(self, key: str, response: ImproveResultEntity) -> None:
        """Store a result with the current timestamp, replacing any prior entry.

        Args:
            key: The request fingerprint
            response: The result to cache
        """
        ...

    def sweep_expired(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed
        """
        ...

    def clear(self) -> int:
        """Remove all entries.

        Returns:
            Number of entries removed
        """
        ...

    def count_all(self) -> int:
        """Count physically stored entries, expired ones included."""
        ...

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
