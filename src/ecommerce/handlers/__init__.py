"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Store + Cache
    (HTTP)  -> (Business) -> (Data Access)
"""

from .entity_handler import EntityHandler, extract_id

__all__ = [
    "EntityHandler",
    "extract_id",
]
