"""Error types raised by the repository layer.

Absence of an entity is never an error: repositories return ``None`` for
a missing row or cache key and raise only when the backend itself fails.
"""


class DependencyError(Exception):
    """Base class for dependency failures."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        return f"{self.operation}: {self.message}"


class StoreError(DependencyError):
    """The persistent store failed. Surfaced to callers."""


class CacheError(DependencyError):
    """The cache failed. Logged and swallowed by the service layer."""
