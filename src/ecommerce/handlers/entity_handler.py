"""HTTP handlers for entity operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like method checks, JSON decoding, id parsing,
status codes and error mapping.
"""

import re

import structlog
from fastapi import HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from ecommerce.kinds import EntityKind
from ecommerce.services import EntityService

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def extract_id(path: str) -> int:
    """Parse the entity id from the last segment of a request path.

    ``/api/v1/users/123`` gives 123. Paths with fewer than four segments
    (``/users``), an empty last segment (``/api/v1/users/``) or a
    non-numeric one (``/api/v1/users/abc``) are rejected.

    Raises:
        ValueError: If no valid id can be extracted
    """
    parts = path.split("/")
    if len(parts) < 4:
        raise ValueError(f"invalid path: {path!r}")

    id_str = parts[-1]
    if not _ID_PATTERN.fullmatch(id_str):
        raise ValueError(f"invalid id: {id_str!r}")
    return int(id_str)


class EntityHandler:
    """HTTP handlers for one entity kind.

    This handler delegates business logic to EntityService and maps
    outcomes to HTTP:
    - success -> response DTO (201 on create, 200 on get)
    - absent -> 404
    - service error -> 500
    - wrong method, malformed JSON, invalid body or id -> 400

    Example:
        ```python
        handler = EntityHandler(kind=USERS, service=user_service, logger=get_logger(__name__))

        @router.api_route("/api/v1/users", methods=ALL_METHODS, status_code=201)
        async def create_user(request: Request):
            return await handler.create(request)
        ```
    """

    def __init__(
        self,
        kind: EntityKind,
        service: EntityService,
        logger: structlog.stdlib.BoundLogger,
    ) -> None:
        """Initialize the entity handler.

        Args:
            kind: The entity kind served (DTOs, labels).
            service: The entity service for business logic (required).
            logger: Structured logger.
        """
        self._kind = kind
        self._service = service
        self._logger = logger.bind(kind=kind.label)

    async def create(self, request: Request) -> BaseModel:
        """Handle POST /api/v1/<kind>s requests.

        Args:
            request: The incoming request

        Returns:
            Response DTO for the created entity

        Raises:
            HTTPException: 400 on wrong method or bad body, 500 on store failure
        """
        self._require_method(request, "POST")

        try:
            payload = await request.json()
        except ValueError as e:
            self._logger.warning("invalid_json", error=str(e))
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON") from e

        try:
            body = self._kind.create_request.model_validate(payload)
        except ValidationError as e:
            self._logger.warning("invalid_create_request", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid {self._kind.label}: {_describe(e)}",
            ) from e

        try:
            entity = await self._service.create(body.model_dump())
        except Exception as e:
            self._logger.error("create_failed", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to create {self._kind.label}",
            ) from e

        return self._kind.response.model_validate(entity)

    async def get(self, request: Request) -> BaseModel:
        """Handle GET /api/v1/<kind>s/<id> requests.

        Args:
            request: The incoming request

        Returns:
            Response DTO for the entity

        Raises:
            HTTPException: 400 on wrong method or bad id, 404 if absent,
                500 on store failure
        """
        self._require_method(request, "GET")

        try:
            entity_id = extract_id(request.url.path)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid {self._kind.label} ID",
            ) from e

        try:
            entity = await self._service.get_by_id(entity_id)
        except Exception as e:
            self._logger.error("get_failed", id=entity_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get {self._kind.label}",
            ) from e

        if entity is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self._kind.label.capitalize()} not found",
            )

        return self._kind.response.model_validate(entity)

    def _require_method(self, request: Request, method: str) -> None:
        if request.method != method:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Method not allowed")


def _describe(error: ValidationError) -> str:
    """Condense pydantic errors into one line, e.g. ``email: Field required``."""
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "body"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
