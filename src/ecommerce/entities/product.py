"""Product domain entity."""

from dataclasses import dataclass
from typing import ClassVar

from .base import Entity


@dataclass(kw_only=True)
class Product(Entity):
    """A catalog product.

    Attributes:
        name: Product name
        description: Free-form description
        price: Unit price
    """

    kind: ClassVar[str] = "product"

    name: str
    description: str = ""
    price: float
