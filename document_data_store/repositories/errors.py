"""Repository-level error types."""

from __future__ import annotations


class RepositoryError(RuntimeError):
    """Base class for repository-level errors."""


class UnsupportedDatabaseError(RepositoryError):
    """Raised when a connection string would persist documents outside memory."""


__all__ = ["RepositoryError", "UnsupportedDatabaseError"]
