"""Entity kinds served by this package.

Each service process serves exactly one kind, selected by
``Settings.service_name``. A kind ties together the entity dataclass, its
table, its DTOs and its URL prefix.
"""

from dataclasses import dataclass

from pydantic import BaseModel
from sqlalchemy import Table

from ecommerce.dto import CreateProductRequest, CreateUserRequest, ProductResponse, UserResponse
from ecommerce.entities import Entity, Product, User
from ecommerce.repositories import tables


@dataclass(frozen=True)
class EntityKind:
    """Static description of one entity kind."""

    service_name: str
    entity_type: type[Entity]
    table: Table
    create_request: type[BaseModel]
    response: type[BaseModel]

    @property
    def label(self) -> str:
        """Singular name used in messages, e.g. ``user``."""
        return self.entity_type.kind

    @property
    def collection_path(self) -> str:
        return f"/api/v1/{self.service_name}"


USERS = EntityKind(
    service_name="users",
    entity_type=User,
    table=tables.users,
    create_request=CreateUserRequest,
    response=UserResponse,
)

PRODUCTS = EntityKind(
    service_name="products",
    entity_type=Product,
    table=tables.products,
    create_request=CreateProductRequest,
    response=ProductResponse,
)

KINDS = {kind.service_name: kind for kind in (USERS, PRODUCTS)}


def get_kind(service_name: str) -> EntityKind:
    """Look up a kind by service name.

    Raises:
        ValueError: If the service name is unknown
    """
    try:
        return KINDS[service_name]
    except KeyError:
        raise ValueError(f"Unknown service: {service_name!r}") from None
