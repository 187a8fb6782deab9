"""Global exception handlers.

Every error leaves the service as ``{"error": <status text>, "message": <text>}``:
- HTTPException (handler errors and routing 404/405) -> its own status
- RequestValidationError -> 400
- Exception (catch-all) -> 500, never leaks internal details
"""

from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecommerce.dto import ErrorResponse
from ecommerce.logging import get_logger

logger = get_logger(__name__)


def status_text(status_code: int) -> str:
    """HTTP reason phrase for a status code, e.g. 404 -> ``Not Found``."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Status"


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=status_text(status_code), message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("request_validation_failed", path=request.url.path, errors=exc.errors())
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")
