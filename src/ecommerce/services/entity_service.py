"""Entity service for core business logic.

This service implements cache-aside reads and store-first writes by
coordinating the persistent store and the cache. The cache is best-effort
in both directions: its failures are logged and never reach the caller.
"""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

import structlog

from ecommerce.entities import Entity
from ecommerce.protocols import EntityCache, EntityStore

T = TypeVar("T", bound=Entity)


class EntityService(Generic[T]):
    """Create and fetch entities of one kind.

    The service depends on PROTOCOLS, not concrete implementations:
    - EntityStore: PostgreSQL in production, anything async in tests
    - EntityCache: Redis in production

    Example:
        ```python
        from ecommerce.entities import User
        from ecommerce.services import EntityService

        users = EntityService(
            entity_type=User,
            store=PostgresEntityRepository.from_settings(settings, User, tables.users),
            cache=RedisCacheRepository.from_settings(settings, User),
            logger=get_logger("ecommerce.services.users"),
        )
        user = await users.create({"name": "Ada", "email": "ada@example.com"})
        ```
    """

    def __init__(
        self,
        entity_type: type[T],
        store: EntityStore[T],
        cache: EntityCache[T],
        logger: structlog.stdlib.BoundLogger,
    ) -> None:
        """Initialize the entity service.

        Args:
            entity_type: Dataclass built from create attributes.
            store: Persistent store (source of truth).
            cache: Cache backend (optimization only).
            logger: Structured logger.
        """
        self._entity_type = entity_type
        self._store = store
        self._cache = cache
        self._logger = logger.bind(kind=entity_type.kind)

    async def create(self, attributes: Mapping[str, Any]) -> T:
        """Persist a new entity, then mirror it into the cache.

        Business logic:
        1. Build the entity (id and timestamps unset)
        2. Write it to the store, which assigns id and timestamps
        3. Write it to the cache; a cache failure is logged and ignored

        Args:
            attributes: Entity attributes from the create request

        Returns:
            The persisted entity

        Raises:
            StoreError: If the store write fails (the cache is not touched)
        """
        entity = self._entity_type(**attributes)

        self._logger.info("creating_entity")
        try:
            await self._store.create(entity)
        except Exception as e:
            self._logger.error("entity_create_failed", error=str(e))
            raise

        await self._write_cache(entity)

        self._logger.info("entity_created", id=entity.id)
        return entity

    async def get_by_id(self, entity_id: int) -> T | None:
        """Fetch an entity, preferring the cache.

        Business logic:
        1. Try the cache; an error there counts as a miss
        2. On miss, read the store; store errors propagate
        3. Re-populate the cache from a store hit (best-effort)

        Args:
            entity_id: Identifier to look up

        Returns:
            The entity, or None if it does not exist

        Raises:
            StoreError: If the store read fails
        """
        log = self._logger.bind(id=entity_id)
        log.debug("getting_entity")

        try:
            cached = await self._cache.get(entity_id)
        except Exception as e:
            log.warning("entity_cache_read_failed", error=str(e))
            cached = None

        if cached is not None:
            log.debug("entity_cache_hit")
            return cached

        log.debug("entity_cache_miss")

        try:
            entity = await self._store.get_by_id(entity_id)
        except Exception as e:
            log.error("entity_store_read_failed", error=str(e))
            raise

        if entity is None:
            log.info("entity_not_found")
            return None

        await self._write_cache(entity)

        log.debug("entity_loaded_from_store")
        return entity

    async def _write_cache(self, entity: T) -> None:
        """Write to the cache, logging instead of raising on failure."""
        try:
            await self._cache.set(entity)
        except Exception as e:
            self._logger.warning("entity_cache_write_failed", id=entity.id, error=str(e))
