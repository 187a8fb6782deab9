"""Entity storage protocol.

Defines the interface for the persistent store that owns identifiers
and timestamps.
"""

from typing import Protocol, TypeVar, runtime_checkable

from ecommerce.entities import Entity

T = TypeVar("T", bound=Entity)


@runtime_checkable
class EntityStore(Protocol[T]):
    """Protocol for persistent entity storage.

    Example:
        ```python
        from ecommerce.protocols import EntityStore

        store: EntityStore[User] = PostgresEntityRepository(engine, User, users_table)
        ```
    """

    async def create(self, entity: T) -> None:
        """Persist a new entity.

        On success the entity is mutated in place: ``id`` is assigned and
        ``created_at``/``updated_at`` are set to the same instant.

        Args:
            entity: The entity to insert (id and timestamps unset)

        Raises:
            StoreError: If the write fails
        """
        ...

    async def get_by_id(self, entity_id: int) -> T | None:
        """Fetch an entity by identifier.

        Args:
            entity_id: The identifier to look up

        Returns:
            The entity, or None if no row matches

        Raises:
            StoreError: If the read fails
        """
        ...
