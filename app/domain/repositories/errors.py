"""
Errors raised by repository implementations.
They describe storage failures and are translated into domain errors by the use cases.
"""

from typing import Optional


class RepositoryError(Exception):
    """A data-store operation failed."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class UniqueViolationError(RepositoryError):
    """A write was rejected by a unique constraint."""


class ForeignKeyViolationError(RepositoryError):
    """A write referenced a row that does not exist."""

    def references(self, column: str) -> bool:
        return column in (self.message or "")
