"""Route registration.

Entity routes accept every method and let the handler reject the wrong
one, so a method mismatch is answered with 400 and the usual error body.
"""

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

from ecommerce.api.dependencies import HandlerDep, SettingsDep
from ecommerce.dto import HealthCheckResponse
from ecommerce.kinds import EntityKind

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_health_router() -> APIRouter:
    router = APIRouter()

    @router.get("/health", response_model=HealthCheckResponse)
    async def health(settings: SettingsDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return HealthCheckResponse(service=settings.service_name, status="ok")

    return router


def build_entity_router(kind: EntityKind) -> APIRouter:
    """Routes for one entity kind: create at the collection, get by id below it."""
    router = APIRouter(tags=[kind.service_name])

    @router.api_route(
        kind.collection_path,
        methods=ALL_METHODS,
        response_model=kind.response,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind.label}",
    )
    async def create_entity(request: Request, handler: HandlerDep) -> BaseModel:
        return await handler.create(request)

    @router.api_route(
        kind.collection_path + "/{entity_path:path}",
        methods=ALL_METHODS,
        response_model=kind.response,
        name=f"get_{kind.label}",
    )
    async def get_entity(request: Request, handler: HandlerDep) -> BaseModel:
        return await handler.get(request)

    return router
