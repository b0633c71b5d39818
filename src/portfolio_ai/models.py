from dataclasses import dataclass


@dataclass
class GatewayMetrics:
    """Track request counters for the improvement gateway."""

    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    provider_calls: int = 0
    total_provider_time_ms: float = 0.0
    rate_limited_fallbacks: int = 0
    malformed_fallbacks: int = 0
    failures: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    @property
    def avg_provider_time_ms(self) -> float:
        """Calculate average provider call time."""
        if self.provider_calls == 0:
            return 0.0
        return self.total_provider_time_ms / self.provider_calls

    def record_hit(self) -> None:
        """Record a cache hit."""
        self.total_requests += 1
        self.cache_hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        self.total_requests += 1
        self.cache_misses += 1

    def record_provider_call(self, duration_ms: float) -> None:
        """Record a completed provider call."""
        self.provider_calls += 1
        self.total_provider_time_ms += duration_ms

    def record_fallback(self, rate_limited: bool) -> None:
        """Record a locally computed result."""
        if rate_limited:
            self.rate_limited_fallbacks += 1
        else:
            self.malformed_fallbacks += 1

    def record_failure(self) -> None:
        """Record a fatal provider failure."""
        self.failures += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "hit_rate": self.hit_rate,
            "provider_calls": self.provider_calls,
            "avg_provider_time_ms": self.avg_provider_time_ms,
            "rate_limited_fallbacks": self.rate_limited_fallbacks,
            "malformed_fallbacks": self.malformed_fallbacks,
            "failures": self.failures,
        }
