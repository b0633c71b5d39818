import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Provider
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    # Checked lazily: a missing key only fails the first improve call
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")
    openai_max_retries: int = int(os.getenv("OPENAI_MAX_RETRIES", "2"))
    openai_temperature: float = float(os.getenv("OPENAI_TEMPERATURE", "0.35"))

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "1200"))  # 20 minutes
    cache_capacity: int = int(os.getenv("CACHE_CAPACITY", "400"))
    # 0 disables oldest-first eviction of live entries
    cache_hard_capacity: int = int(os.getenv("CACHE_HARD_CAPACITY", "0"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def has_api_key(self) -> bool:
        """Check if a provider credential is configured.

        Returns:
            True if the API key is set and not blank, False otherwise
        """
        return bool(self.openai_api_key and self.openai_api_key.strip())

    @property
    def cors_origins(self) -> list[str]:
        """Split the comma separated CORS origin list."""
        origins = [item.strip() for item in self.cors_allow_origins.split(",")]
        return [item for item in origins if item] or ["*"]

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.cache_capacity <= 0:
            raise ValueError("CACHE_CAPACITY must be positive")

        if self.cache_hard_capacity < 0:
            raise ValueError("CACHE_HARD_CAPACITY must be 0 (disabled) or positive")

        if not 0 <= self.openai_temperature <= 2:
            raise ValueError(
                f"OPENAI_TEMPERATURE must be between 0 and 2, got {self.openai_temperature}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
