"""Redis implementation of EntityCache.

Entities are stored as JSON strings under ``"<kind>:<id>"`` with a fixed
expiry. Serialization goes through a pydantic TypeAdapter over the entity
dataclass, so timestamps travel as ISO-8601 strings.
"""

from typing import Generic, TypeVar

import redis.asyncio as redis
from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from ecommerce.config import Settings, get_redis_client
from ecommerce.entities import Entity
from ecommerce.errors import CacheError

T = TypeVar("T", bound=Entity)

DEFAULT_TTL = 300  # 5 minutes


class RedisCacheRepository(Generic[T]):
    """Redis implementation of the EntityCache protocol.

    This class satisfies the EntityCache protocol through structural
    typing - no explicit inheritance needed.

    A key miss returns None; transport and decoding failures raise
    CacheError.
    """

    def __init__(
        self,
        entity_type: type[T],
        redis_client: redis.Redis,
        ttl: int = DEFAULT_TTL,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            entity_type: Entity dataclass; its ``kind`` prefixes every key.
            redis_client: Async Redis client instance.
            ttl: Time-to-live for entries in seconds.
        """
        self._entity_type = entity_type
        self._client = redis_client
        self._ttl = ttl
        self._adapter = TypeAdapter(entity_type)

    @classmethod
    def from_settings(cls, settings: Settings, entity_type: type[T]) -> "RedisCacheRepository[T]":
        """Factory method to create RedisCacheRepository from settings.

        Args:
            settings: Service settings (Redis address, TTL)
            entity_type: Entity dataclass to cache

        Returns:
            Configured RedisCacheRepository
        """
        return cls(
            entity_type=entity_type,
            redis_client=get_redis_client(settings),
            ttl=settings.cache_ttl,
        )

    def cache_key(self, entity_id: int) -> str:
        """Build the key for an entity id, e.g. ``user:42``."""
        return f"{self._entity_type.kind}:{entity_id}"

    def encode(self, entity: T) -> bytes:
        return self._adapter.dump_json(entity)

    def decode(self, data: bytes | str) -> T:
        return self._adapter.validate_json(data)

    async def set(self, entity: T) -> None:
        """Store an entity with the configured TTL.

        Args:
            entity: A persisted entity

        Raises:
            CacheError: If Redis rejects the write
        """
        key = self.cache_key(entity.id)
        try:
            await self._client.set(key, self.encode(entity), ex=self._ttl)
        except RedisError as e:
            raise CacheError(f"Failed to set {key}: {e}", "set") from e

    async def get(self, entity_id: int) -> T | None:
        """Fetch a cached entity.

        Args:
            entity_id: Identifier to look up

        Returns:
            The entity, or None on key miss

        Raises:
            CacheError: If Redis fails or the payload cannot be decoded
        """
        key = self.cache_key(entity_id)
        try:
            data = await self._client.get(key)
        except RedisError as e:
            raise CacheError(f"Failed to get {key}: {e}", "get") from e

        if data is None:
            return None

        try:
            return self.decode(data)
        except ValidationError as e:
            raise CacheError(f"Corrupt cache entry {key}: {e}", "decode") from e

    async def delete(self, entity_id: int) -> None:
        """Delete a cached entity.

        Args:
            entity_id: Identifier whose key to remove

        Raises:
            CacheError: If Redis fails
        """
        key = self.cache_key(entity_id)
        try:
            await self._client.delete(key)
        except RedisError as e:
            raise CacheError(f"Failed to delete {key}: {e}", "delete") from e

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def ttl(self) -> int:
        return self._ttl
