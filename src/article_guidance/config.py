import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")  # "memory" or "redis"
    cache_namespace: str = os.getenv("CACHE_NAMESPACE", "articleguidance")
    # Bump to invalidate every stored entry after a shape change
    cache_schema_version: str = os.getenv("CACHE_SCHEMA_VERSION", "v3")
    entity_cache_ttl: int = int(os.getenv("ENTITY_CACHE_TTL", "86400"))  # 1 day
    negative_cache_ttl: int = int(os.getenv("NEGATIVE_CACHE_TTL", "300"))  # 5 minutes
    cache_lock_timeout: float = float(os.getenv("CACHE_LOCK_TIMEOUT", "30"))

    # Upstream services
    wikidata_api_url: str = os.getenv("WIKIDATA_API_URL", "https://www.wikidata.org/w/api.php")
    sparql_endpoint_url: str = os.getenv("SPARQL_ENDPOINT_URL", "https://query.wikidata.org/sparql")
    outlines_url: str = os.getenv(
        "OUTLINES_URL",
        "http://localhost:8080/w/rest.php/articleguidance/v0/outlines",
    )
    outlines_enabled: bool = os.getenv("OUTLINES_ENABLED", "true").lower() == "true"
    http_user_agent: str = os.getenv(
        "HTTP_USER_AGENT", "ArticleGuidance/0.1 (type resolution service)"
    )
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30"))

    # Search
    search_limit: int = int(os.getenv("SEARCH_LIMIT", "20"))
    search_min_length: int = int(os.getenv("SEARCH_MIN_LENGTH", "2"))
    search_debounce_seconds: float = float(os.getenv("SEARCH_DEBOUNCE_SECONDS", "0.3"))

    # Commons thumbnails
    thumbnail_width: int = int(os.getenv("THUMBNAIL_WIDTH", "200"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def uses_redis(self) -> bool:
        """Check if the configured cache backend is Redis.

        Returns:
            True if entries should be stored in Redis, False for in-process memory
        """
        return self.cache_backend.lower() == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend.lower() not in ("memory", "redis"):
            raise ValueError(f"CACHE_BACKEND must be 'memory' or 'redis', got {self.cache_backend!r}")

        if self.negative_cache_ttl <= 0 or self.entity_cache_ttl <= 0:
            raise ValueError("ENTITY_CACHE_TTL and NEGATIVE_CACHE_TTL must be positive")

        if self.negative_cache_ttl >= self.entity_cache_ttl:
            raise ValueError(
                f"NEGATIVE_CACHE_TTL ({self.negative_cache_ttl}) must be shorter than "
                f"ENTITY_CACHE_TTL ({self.entity_cache_ttl})"
            )

        if self.search_min_length < 1:
            raise ValueError("SEARCH_MIN_LENGTH must be at least 1")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
