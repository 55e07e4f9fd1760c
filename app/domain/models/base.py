"""
Base exceptions for the domain layer.
Every operational error carries an HTTP status, a machine-readable code
and optional field-level details so the web layer can render it as-is.
"""

from typing import Optional, Any


class DomainException(Exception):
    """Base exception for operational domain errors."""

    status_code: int = 500
    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None
    ):
        self.message = message
        self.code = code or self.default_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.is_operational = True
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Error body used by the response envelope."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(DomainException):
    """Exception raised when input validation fails."""

    status_code = 400
    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        if field and self.details is None:
            self.details = [{"field": field, "message": message}]


class UnauthorizedError(DomainException):
    """Exception raised for authentication errors."""

    status_code = 401
    default_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required", **kwargs):
        super().__init__(message, **kwargs)


class ForbiddenError(DomainException):
    """Exception raised when the caller lacks the required role."""

    status_code = 403
    default_code = "FORBIDDEN"

    def __init__(self, message: str = "Access forbidden", **kwargs):
        super().__init__(message, **kwargs)


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: Any = None, **kwargs):
        super().__init__(f"{entity_type} not found", **kwargs)
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainException):
    """Exception raised when a write conflicts with existing data."""

    status_code = 409
    default_code = "CONFLICT"


class DuplicateCodeError(ConflictError):
    """Exception raised when no unique project code could be allocated."""

    default_code = "DUPLICATE_CODE"

    def __init__(
        self,
        message: str = "Failed to generate unique project code after retries",
        **kwargs
    ):
        super().__init__(message, **kwargs)


class DatabaseError(DomainException):
    """Exception raised when a persistence operation fails unexpectedly."""

    status_code = 500
    default_code = "DATABASE_ERROR"
