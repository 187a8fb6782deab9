import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv
from sqlalchemy import URL

load_dotenv()

SERVICE_PORTS = {"users": 8001, "products": 8002}


def _env(key: str, default: str) -> str:
    """Read an environment variable, falling back when unset or empty."""
    value = os.getenv(key)
    return value if value else default


@dataclass(frozen=True)
class Settings:
    """Service settings loaded from environment variables."""

    # Service
    service_name: str = field(default_factory=lambda: _env("SERVICE_NAME", "users"))
    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = 0  # 0 = per-service default
    environment: str = field(default_factory=lambda: _env("ENVIRONMENT", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "info"))

    # PostgreSQL
    postgres_host: str = field(default_factory=lambda: _env("POSTGRES_HOST", "localhost"))
    postgres_port: int = field(default_factory=lambda: int(_env("POSTGRES_PORT", "5432")))
    postgres_user: str = field(default_factory=lambda: _env("POSTGRES_USER", "postgres"))
    postgres_password: str = field(default_factory=lambda: _env("POSTGRES_PASSWORD", "password"))
    postgres_db: str = ""  # "" = service name

    # Redis
    redis_addr: str = field(default_factory=lambda: _env("REDIS_ADDR", "localhost:6379"))
    cache_ttl: int = field(default_factory=lambda: int(_env("CACHE_TTL", "300")))  # 5 minutes

    def __post_init__(self) -> None:
        """Resolve per-service defaults and validate."""
        if self.service_name not in SERVICE_PORTS:
            raise ValueError(
                f"SERVICE_NAME must be one of {sorted(SERVICE_PORTS)}, got {self.service_name!r}"
            )

        # frozen dataclass: derived defaults go through object.__setattr__
        if not self.port:
            port = int(_env("PORT", str(SERVICE_PORTS[self.service_name])))
            object.__setattr__(self, "port", port)
        if not self.postgres_db:
            object.__setattr__(self, "postgres_db", _env("POSTGRES_DB", self.service_name))

        if not 0 < self.port < 65536:
            raise ValueError(f"PORT must be between 1 and 65535, got {self.port}")
        if self.cache_ttl <= 0:
            raise ValueError(f"CACHE_TTL must be positive, got {self.cache_ttl}")

    @property
    def postgres_url(self) -> URL:
        """SQLAlchemy URL for the async PostgreSQL driver."""
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )

    @property
    def redis_url(self) -> str:
        return f"redis://{self.redis_addr}/0"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(settings: Settings) -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(settings.redis_url, decode_responses=False)
