"""Base entity fields shared by every kind."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass(kw_only=True)
class Entity:
    """Fields owned by the persistent store.

    Attributes:
        id: Store-assigned identifier, 0 until persisted
        created_at: Creation time, None until persisted
        updated_at: Last update time, equal to created_at on creation
    """

    # Prefix of the cache key, e.g. "user" -> "user:42"
    kind: ClassVar[str] = "entity"

    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
