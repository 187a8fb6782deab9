"""Repository layer for data access.

This layer hides external dependencies (PostgreSQL, Redis) behind the
protocol-based interfaces in ``ecommerce.protocols``. The repositories are
protocol-based (structural typing), not inheritance-based.
"""

from ecommerce.protocols import EntityCache, EntityStore

from .postgres_repository import PostgresEntityRepository
from .redis_repository import DEFAULT_TTL, RedisCacheRepository

__all__ = [
    "DEFAULT_TTL",
    "EntityCache",
    "EntityStore",
    "PostgresEntityRepository",
    "RedisCacheRepository",
]
