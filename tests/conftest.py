"""Shared fixtures and in-process doubles for store, cache and Redis."""

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import structlog
from redis.exceptions import ConnectionError as RedisConnectionError

from ecommerce.config import Settings
from ecommerce.entities import Entity, User
from ecommerce.errors import CacheError, StoreError


class InMemoryStore:
    """EntityStore double assigning sequential ids. Counts calls."""

    def __init__(self) -> None:
        self.rows: dict[int, Entity] = {}
        self.create_calls = 0
        self.get_calls = 0
        self.fail = False

    async def create(self, entity: Entity) -> None:
        self.create_calls += 1
        if self.fail:
            raise StoreError("connection refused", "create")
        now = datetime.now(timezone.utc)
        entity.id = len(self.rows) + 1
        entity.created_at = now
        entity.updated_at = now
        self.rows[entity.id] = replace(entity)

    async def get_by_id(self, entity_id: int) -> Entity | None:
        self.get_calls += 1
        if self.fail:
            raise StoreError("connection refused", "get_by_id")
        row = self.rows.get(entity_id)
        return replace(row) if row is not None else None


class InMemoryCache:
    """EntityCache double. Can be switched to fail every call."""

    def __init__(self) -> None:
        self.entries: dict[int, Entity] = {}
        self.set_calls = 0
        self.fail = False

    async def set(self, entity: Entity) -> None:
        self.set_calls += 1
        if self.fail:
            raise CacheError("cache down", "set")
        self.entries[entity.id] = replace(entity)

    async def get(self, entity_id: int) -> Entity | None:
        if self.fail:
            raise CacheError("cache down", "get")
        return self.entries.get(entity_id)

    async def delete(self, entity_id: int) -> None:
        self.entries.pop(entity_id, None)


class FakeRedis:
    """Minimal async Redis double covering the commands the cache uses."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.expiry: dict[str, int | None] = {}
        self.down = False
        self.closed = False

    def _check(self) -> None:
        if self.down:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    async def set(self, key: str, value: bytes, ex: int | None = None) -> bool:
        self._check()
        self.data[key] = value
        self.expiry[key] = ex
        return True

    async def get(self, key: str) -> bytes | None:
        self._check()
        return self.data.get(key)

    async def delete(self, *keys: str) -> int:
        self._check()
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                self.expiry.pop(key, None)
                removed += 1
        return removed

    async def ping(self) -> bool:
        self._check()
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def logger():
    return structlog.get_logger("tests")


@pytest.fixture
def users_settings() -> Settings:
    return Settings(service_name="users")


@pytest.fixture
def products_settings() -> Settings:
    return Settings(service_name="products")


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def memory_cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def persisted_user() -> User:
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return User(id=123, name="John Doe", email="john@example.com", created_at=now, updated_at=now)


@pytest.fixture
def store_mock() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def cache_mock() -> AsyncMock:
    return AsyncMock()
