"""
Tests for the cache-aside entity service.
"""

import asyncio
from datetime import datetime, timezone

import pytest
from structlog.testing import capture_logs

from ecommerce.entities import Product, User
from ecommerce.errors import CacheError, StoreError
from ecommerce.services import EntityService


def assign_identity(entity):
    """Side effect standing in for the database assigning id and timestamps."""
    now = datetime.now(timezone.utc)
    entity.id = 123
    entity.created_at = now
    entity.updated_at = now


@pytest.fixture
def service(store_mock, cache_mock, logger):
    return EntityService(entity_type=User, store=store_mock, cache=cache_mock, logger=logger)


@pytest.mark.asyncio
async def test_create_success(service, store_mock, cache_mock):
    """Created entity carries the store-assigned id and equal timestamps."""
    store_mock.create.side_effect = assign_identity

    user = await service.create({"name": "John Doe", "email": "john@example.com"})

    assert user.id == 123
    assert user.name == "John Doe"
    assert user.email == "john@example.com"
    assert user.created_at is not None
    assert user.created_at == user.updated_at
    store_mock.create.assert_awaited_once_with(user)
    cache_mock.set.assert_awaited_once_with(user)


@pytest.mark.asyncio
async def test_create_store_error_skips_cache(service, store_mock, cache_mock):
    """A failed store write propagates and never reaches the cache."""
    store_mock.create.side_effect = StoreError("database error", "create")

    with pytest.raises(StoreError, match="database error"):
        await service.create({"name": "John Doe", "email": "john@example.com"})

    cache_mock.set.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_cache_error_still_succeeds(store_mock, cache_mock, logger):
    """A failed cache write is logged as a warning and swallowed."""
    store_mock.create.side_effect = assign_identity
    cache_mock.set.side_effect = CacheError("cache error", "set")

    with capture_logs() as logs:
        service = EntityService(entity_type=User, store=store_mock, cache=cache_mock, logger=logger)
        user = await service.create({"name": "John Doe", "email": "john@example.com"})

    assert user.id == 123
    cache_mock.set.assert_awaited_once()
    warnings = [log for log in logs if log["log_level"] == "warning"]
    assert [w["event"] for w in warnings] == ["entity_cache_write_failed"]
    assert warnings[0]["id"] == 123


@pytest.mark.asyncio
async def test_create_with_unexpected_cache_exception(service, store_mock, cache_mock):
    """Any cache exception, not only CacheError, is non-fatal."""
    store_mock.create.side_effect = assign_identity
    cache_mock.set.side_effect = ConnectionResetError("reset by peer")

    user = await service.create({"name": "John Doe", "email": "john@example.com"})

    assert user.id == 123


@pytest.mark.asyncio
async def test_get_cache_hit_skips_store(service, store_mock, cache_mock, persisted_user):
    """A cache hit is returned without a store round-trip."""
    cache_mock.get.return_value = persisted_user

    result = await service.get_by_id(123)

    assert result == persisted_user
    cache_mock.get.assert_awaited_once_with(123)
    store_mock.get_by_id.assert_not_awaited()
    cache_mock.set.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_cache_miss_loads_and_repopulates(service, store_mock, cache_mock, persisted_user):
    """A miss reads the store and writes the result back to the cache."""
    cache_mock.get.return_value = None
    store_mock.get_by_id.return_value = persisted_user

    result = await service.get_by_id(123)

    assert result == persisted_user
    store_mock.get_by_id.assert_awaited_once_with(123)
    cache_mock.set.assert_awaited_once_with(persisted_user)


@pytest.mark.asyncio
async def test_get_not_found(service, store_mock, cache_mock):
    """Absent in the store means None, no error, and no cache write."""
    cache_mock.get.return_value = None
    store_mock.get_by_id.return_value = None

    result = await service.get_by_id(999)

    assert result is None
    cache_mock.set.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_cache_error_falls_back_to_store(service, store_mock, cache_mock, persisted_user):
    """A cache read error counts as a miss; the store is queried exactly once."""
    cache_mock.get.side_effect = CacheError("cache connection error", "get")
    store_mock.get_by_id.return_value = persisted_user

    result = await service.get_by_id(123)

    assert result == persisted_user
    store_mock.get_by_id.assert_awaited_once_with(123)


@pytest.mark.asyncio
async def test_get_repopulate_error_still_succeeds(service, store_mock, cache_mock, persisted_user):
    """A failed cache write after a store hit does not fail the read."""
    cache_mock.get.return_value = None
    store_mock.get_by_id.return_value = persisted_user
    cache_mock.set.side_effect = CacheError("cache down", "set")

    result = await service.get_by_id(123)

    assert result == persisted_user


@pytest.mark.asyncio
async def test_get_repopulate_error_logs_cache_write_warning(store_mock, cache_mock, logger, persisted_user):
    cache_mock.get.return_value = None
    store_mock.get_by_id.return_value = persisted_user
    cache_mock.set.side_effect = CacheError("cache down", "set")

    with capture_logs() as logs:
        service = EntityService(entity_type=User, store=store_mock, cache=cache_mock, logger=logger)
        await service.get_by_id(123)

    warnings = [log for log in logs if log["log_level"] == "warning"]
    assert [w["event"] for w in warnings] == ["entity_cache_write_failed"]
    assert warnings[0]["id"] == 123


@pytest.mark.asyncio
async def test_get_store_error_propagates(service, store_mock, cache_mock):
    """A store read error reaches the caller."""
    cache_mock.get.return_value = None
    store_mock.get_by_id.side_effect = StoreError("database connection error", "get_by_id")

    with pytest.raises(StoreError, match="database connection error"):
        await service.get_by_id(123)

    cache_mock.set.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_after_create_uses_cache(memory_store, memory_cache, logger):
    """With a working cache, reading a freshly created entity never hits the store."""
    service = EntityService(entity_type=Product, store=memory_store, cache=memory_cache, logger=logger)

    created = await service.create({"name": "Lamp", "description": "Desk lamp", "price": 19.99})
    fetched = await service.get_by_id(created.id)

    assert fetched == created
    assert memory_store.create_calls == 1
    assert memory_store.get_calls == 0


@pytest.mark.asyncio
async def test_get_with_cache_down_reads_store_each_time(memory_store, memory_cache, logger):
    """A dead cache degrades to one store read per request, never to an error."""
    service = EntityService(entity_type=User, store=memory_store, cache=memory_cache, logger=logger)
    memory_cache.fail = True

    created = await service.create({"name": "Ada", "email": "ada@example.com"})
    first = await service.get_by_id(created.id)
    second = await service.get_by_id(created.id)

    assert first == created
    assert second == created
    assert memory_store.get_calls == 2


@pytest.mark.asyncio
async def test_concurrent_creates_get_distinct_ids(memory_store, memory_cache, logger):
    """Ids come from the store, so parallel creates never collide."""
    service = EntityService(entity_type=User, store=memory_store, cache=memory_cache, logger=logger)

    created = await asyncio.gather(
        *(service.create({"name": f"user{i}", "email": f"user{i}@example.com"}) for i in range(5))
    )

    assert len({user.id for user in created}) == 5
