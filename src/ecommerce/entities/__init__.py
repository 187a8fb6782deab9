"""Domain entities for internal representation.

These are plain dataclasses used by services and repositories. They are
NOT used for API contracts - use DTOs from the dto package for that.

Entities are mutable: the persistent store assigns ``id``, ``created_at``
and ``updated_at`` in place on the first successful write.
"""

from .base import Entity
from .product import Product
from .user import User

__all__ = ["Entity", "Product", "User"]
