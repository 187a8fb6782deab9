"""Ecommerce services - users and products over PostgreSQL with a Redis read-through cache.

This package provides a layered architecture shared by both services:

Layers:
    - protocols: Interface contracts (EntityStore, EntityCache)
    - repositories: Data access implementations (PostgreSQL, Redis)
    - services: Business logic (cache-aside orchestration)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from ecommerce.api.app import create_app
    from ecommerce.config import Settings

    app = create_app(Settings(service_name="products"))
    ```

Run a service with ``SERVICE_NAME=users python -m ecommerce``.
"""

__version__ = "0.1.0"

from ecommerce.entities import Entity, Product, User
from ecommerce.errors import CacheError, DependencyError, StoreError
from ecommerce.protocols import EntityCache, EntityStore
from ecommerce.services import EntityService

__all__ = [
    "__version__",
    # Protocols (interfaces)
    "EntityCache",
    "EntityStore",
    # Services (business logic)
    "EntityService",
    # Entities (domain models)
    "Entity",
    "Product",
    "User",
    # Errors
    "CacheError",
    "DependencyError",
    "StoreError",
]
