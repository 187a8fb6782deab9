"""Dependency injection configuration for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Components stored in app.state during lifespan (or by create_app
      when a service is injected)
    - Dependency functions retrieve from request.app.state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from ecommerce.config import Settings
from ecommerce.errors import StoreError
from ecommerce.handlers import EntityHandler
from ecommerce.kinds import EntityKind
from ecommerce.logging import get_logger
from ecommerce.repositories import PostgresEntityRepository, RedisCacheRepository
from ecommerce.services import EntityService

logger = get_logger(__name__)


def get_handler(request: Request) -> EntityHandler:
    """Dependency injection for EntityHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "entity_handler", None)
    if handler is None:
        raise RuntimeError("EntityHandler not initialized. Check lifespan setup.")
    return handler


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def wire(app: FastAPI, kind: EntityKind, service: EntityService) -> None:
    """Store a service and its handler in app.state."""
    app.state.entity_service = service
    app.state.entity_handler = EntityHandler(
        kind=kind,
        service=service,
        logger=get_logger("ecommerce.handlers"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Store (PostgreSQL) - pinged and migrated; failure aborts startup
    2. Cache (Redis) - lazily connected, failures are tolerated later
    3. Service and handler

    Skipped when create_app already received a service.

    Cleanup:
        Closes both connection pools and clears app.state on shutdown
    """
    if getattr(app.state, "entity_handler", None) is not None:
        yield
        return

    settings: Settings = app.state.settings
    kind: EntityKind = app.state.kind

    store = PostgresEntityRepository.from_settings(settings, kind.entity_type, kind.table)
    try:
        await store.ping()
        await store.create_tables()
    except StoreError as e:
        logger.critical("store_unavailable", error=str(e), host=settings.postgres_host)
        await store.close()
        raise

    cache = RedisCacheRepository.from_settings(settings, kind.entity_type)

    service = EntityService(
        entity_type=kind.entity_type,
        store=store,
        cache=cache,
        logger=get_logger(f"ecommerce.services.{kind.service_name}"),
    )
    wire(app, kind, service)

    logger.info("service_started", port=settings.port, cache_ttl=settings.cache_ttl)

    try:
        yield
    finally:
        del app.state.entity_handler
        del app.state.entity_service
        await cache.close()
        await store.close()
        logger.info("service_stopped")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[EntityHandler, Depends(get_handler)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
