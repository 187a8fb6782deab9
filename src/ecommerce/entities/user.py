"""User domain entity."""

from dataclasses import dataclass
from typing import ClassVar

from .base import Entity


@dataclass(kw_only=True)
class User(Entity):
    """A registered user.

    Attributes:
        name: Display name
        email: Unique email address
    """

    kind: ClassVar[str] = "user"

    name: str
    email: str
