"""FastAPI application factory."""

from fastapi import FastAPI

from ecommerce import __version__
from ecommerce.api.dependencies import lifespan, wire
from ecommerce.api.error_handlers import register_error_handlers
from ecommerce.api.routes import build_entity_router, build_health_router
from ecommerce.config import Settings, get_settings
from ecommerce.kinds import get_kind
from ecommerce.services import EntityService


def create_app(settings: Settings | None = None, service: EntityService | None = None) -> FastAPI:
    """Build the app for the service named in settings.

    Args:
        settings: Service settings. Defaults to the cached environment settings.
        service: Pre-built entity service. When given, lifespan does not
            connect to PostgreSQL or Redis.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    kind = get_kind(settings.service_name)

    app = FastAPI(
        title=f"{kind.service_name.capitalize()} Service",
        description=f"Create and read {kind.service_name} with a read-through Redis cache",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.kind = kind

    if service is not None:
        wire(app, kind, service)

    register_error_handlers(app)
    app.include_router(build_health_router())
    app.include_router(build_entity_router(kind))

    return app
