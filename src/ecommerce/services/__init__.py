"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Store + Cache
    (HTTP)  -> (Business) -> (Data Access)
"""

from .entity_service import EntityService

__all__ = [
    "EntityService",
]
