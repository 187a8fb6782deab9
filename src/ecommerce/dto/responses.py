"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Response DTO for a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Store-assigned identifier")
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class ProductResponse(BaseModel):
    """Response DTO for a product."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Store-assigned identifier")
    name: str
    description: str
    price: float
    created_at: datetime
    updated_at: datetime


class ErrorResponse(BaseModel):
    """Response DTO for every error status."""

    error: str = Field(..., description="HTTP status text, e.g. 'Not Found'")
    message: str = Field(..., description="Human-readable explanation")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    service: str = Field(..., description="Service name")
    status: str = Field("ok", description="Always 'ok' while the process is serving")
