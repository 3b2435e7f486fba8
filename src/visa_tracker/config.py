import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Visa cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")  # or "memory"
    visa_cache_ttl_days: int = int(os.getenv("VISA_CACHE_TTL_DAYS", "30"))
    visa_cache_key_prefix: str = os.getenv("VISA_CACHE_KEY_PREFIX", "visa_cache")

    # Visa requirement API (RapidAPI)
    rapidapi_key: str | None = os.getenv("RAPIDAPI_KEY")
    rapidapi_host: str = os.getenv("RAPIDAPI_HOST", "visa-requirement.p.rapidapi.com")
    visa_api_base_url: str = os.getenv(
        "VISA_API_BASE_URL", "https://visa-requirement.p.rapidapi.com"
    )
    visa_api_timeout: float = float(os.getenv("VISA_API_TIMEOUT", "15"))

    # Schengen rule
    schengen_max_days: int = int(os.getenv("SCHENGEN_MAX_DAYS", "90"))
    schengen_window_days: int = int(os.getenv("SCHENGEN_WINDOW_DAYS", "180"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in ("redis", "memory"):
            raise ValueError(
                f"CACHE_BACKEND must be 'redis' or 'memory', got {self.cache_backend!r}"
            )

        if self.visa_cache_ttl_days <= 0:
            raise ValueError("VISA_CACHE_TTL_DAYS must be a positive number of days")

        if not 0 < self.schengen_max_days <= self.schengen_window_days:
            raise ValueError(
                "SCHENGEN_MAX_DAYS must be positive and not exceed SCHENGEN_WINDOW_DAYS"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
