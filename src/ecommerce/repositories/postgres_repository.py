"""PostgreSQL implementation of EntityStore.

Uses SQLAlchemy Core on an async engine (asyncpg driver). One repository
instance serves one entity kind and its table.
"""

from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import Table, insert, select, text
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ecommerce.config import Settings
from ecommerce.entities import Entity
from ecommerce.errors import StoreError

T = TypeVar("T", bound=Entity)

# asyncpg raises OSError subclasses (e.g. ConnectionRefusedError) unwrapped
# when the initial connect fails
DB_ERRORS = (SQLAlchemyError, OSError)


class PostgresEntityRepository(Generic[T]):
    """SQL implementation of the EntityStore protocol.

    This class satisfies the EntityStore protocol through structural
    typing - no explicit inheritance needed.

    Any SQLAlchemy or connection error is re-raised as StoreError carrying the failed
    operation. A missing row is not an error: get_by_id returns None.
    """

    def __init__(self, engine: AsyncEngine, entity_type: type[T], table: Table) -> None:
        """Initialize the repository.

        Args:
            engine: Async engine (owns the connection pool)
            entity_type: Dataclass built from each row
            table: Table whose columns match the entity fields
        """
        self._engine = engine
        self._entity_type = entity_type
        self._table = table

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        entity_type: type[T],
        table: Table,
    ) -> "PostgresEntityRepository[T]":
        """Factory method building the engine from settings.

        Args:
            settings: Service settings providing the connection URL
            entity_type: Entity dataclass
            table: Backing table

        Returns:
            Configured PostgresEntityRepository
        """
        engine = create_async_engine(
            settings.postgres_url,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        return cls(engine=engine, entity_type=entity_type, table=table)

    async def create_tables(self) -> None:
        """Create the backing table if it does not exist."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(self._table.metadata.create_all, tables=[self._table])
        except DB_ERRORS as e:
            raise StoreError(f"Failed to create table {self._table.name}: {e}", "create_tables") from e

    async def ping(self) -> None:
        """Round-trip a trivial query.

        Raises:
            StoreError: If the database is unreachable
        """
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except DB_ERRORS as e:
            raise StoreError(f"Database unreachable: {e}", "ping") from e

    async def create(self, entity: T) -> None:
        """Insert an entity and assign its id and timestamps.

        Args:
            entity: The entity to persist (mutated in place on success)

        Raises:
            StoreError: If the insert fails
        """
        now = datetime.now(timezone.utc)
        values = self._to_row(entity)
        values["created_at"] = now
        values["updated_at"] = now

        stmt = insert(self._table).values(**values).returning(self._table.c.id)
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
                new_id = result.scalar_one()
        except DB_ERRORS as e:
            raise StoreError(f"Failed to insert into {self._table.name}: {e}", "create") from e

        entity.id = new_id
        entity.created_at = now
        entity.updated_at = now

    async def get_by_id(self, entity_id: int) -> T | None:
        """Fetch an entity by id.

        Args:
            entity_id: Identifier to look up

        Returns:
            The entity, or None if no row matches

        Raises:
            StoreError: If the query fails
        """
        stmt = select(self._table).where(self._table.c.id == entity_id)
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                row = result.mappings().first()
        except DB_ERRORS as e:
            raise StoreError(f"Failed to query {self._table.name}: {e}", "get_by_id") from e

        if row is None:
            return None
        return self._from_row(row)

    async def health_check(self) -> bool:
        """Check if the database is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            await self.ping()
            return True
        except StoreError:
            return False

    async def close(self) -> None:
        """Dispose of the connection pool."""
        await self._engine.dispose()

    def _to_row(self, entity: T) -> dict[str, Any]:
        """Column values for the entity's own attributes."""
        return {
            f.name: getattr(entity, f.name)
            for f in fields(entity)
            if f.name not in ("id", "created_at", "updated_at")
        }

    def _from_row(self, row: RowMapping) -> T:
        values = {f.name: row[f.name] for f in fields(self._entity_type)}
        if "description" in values and values["description"] is None:
            values["description"] = ""
        # Some drivers (SQLite) hand back naive datetimes
        for name in ("created_at", "updated_at"):
            value = values[name]
            if isinstance(value, datetime) and value.tzinfo is None:
                values[name] = value.replace(tzinfo=timezone.utc)
        return self._entity_type(**values)
