"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
Internal domain logic should use entities from the entities package.
"""

from .requests import CreateProductRequest, CreateUserRequest
from .responses import ErrorResponse, HealthCheckResponse, ProductResponse, UserResponse

__all__ = [
    "CreateUserRequest",
    "CreateProductRequest",
    "UserResponse",
    "ProductResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
