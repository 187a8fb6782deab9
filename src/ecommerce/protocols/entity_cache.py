"""Entity cache protocol.

Defines the interface for a key-value cache keyed by ``"<kind>:<id>"``
with a fixed expiry.
"""

from typing import Protocol, TypeVar, runtime_checkable

from ecommerce.entities import Entity

T = TypeVar("T", bound=Entity)


@runtime_checkable
class EntityCache(Protocol[T]):
    """Protocol for entity cache backends."""

    async def set(self, entity: T) -> None:
        """Serialize and store an entity under its key with the configured TTL.

        Raises:
            CacheError: If the write fails
        """
        ...

    async def get(self, entity_id: int) -> T | None:
        """Fetch a cached entity.

        Returns:
            The entity, or None on key miss

        Raises:
            CacheError: If the read or decoding fails
        """
        ...

    async def delete(self, entity_id: int) -> None:
        """Remove a cached entity. Deleting a missing key is not an error.

        Raises:
            CacheError: If the delete fails
        """
        ...
