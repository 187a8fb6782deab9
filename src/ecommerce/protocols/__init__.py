"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (PostgreSQL -> SQLite, Redis -> in-memory)
- Unit testing with mock implementations
- Clear separation of concerns

Both protocols report absence as ``None`` and failure as an exception.
"""

from .entity_cache import EntityCache
from .entity_store import EntityStore

__all__ = [
    "EntityCache",
    "EntityStore",
]
