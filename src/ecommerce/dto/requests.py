"""Request DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequest(BaseModel):
    """Request DTO for creating a user."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Display name", min_length=1, max_length=100)
    email: str = Field(..., description="Unique email address", min_length=1, max_length=100)


class CreateProductRequest(BaseModel):
    """Request DTO for creating a product."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Product name", min_length=1, max_length=200)
    description: str = Field("", description="Free-form description")
    price: float = Field(..., description="Unit price", ge=0)
