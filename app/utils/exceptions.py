"""
Custom exception classes for the LightBnB data-access layer.
Separates execution failures from absent results so callers can tell them apart.
"""

from typing import Any, Dict, List, Optional


class DataAccessError(Exception):
    """Base exception class for the data-access layer."""

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code


class RepositoryError(DataAccessError):
    """A statement failed to execute against the database."""

    def __init__(self, operation: str, detail: str, error_code: str = "DATABASE_ERROR"):
        super().__init__(f"{operation} failed: {detail}", error_code=error_code)
        self.operation = operation


class DuplicateResourceError(RepositoryError):
    """Duplicate resource exception."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"create {resource.lower()}",
            f"{resource} with identifier '{identifier}' already exists",
            error_code="CONFLICT"
        )
        self.resource = resource
        self.identifier = identifier


class DatabaseNotConnectedError(DataAccessError):
    """The database handle was used before connect() or after dispose()."""

    def __init__(self, detail: str = "Database is not connected"):
        super().__init__(detail, error_code="NOT_CONNECTED")


class RecordValidationError(DataAccessError):
    """Input record failed validation before any SQL was issued."""

    def __init__(self, detail: str, field_errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(detail, error_code="VALIDATION_ERROR")
        self.field_errors = field_errors or []

    @classmethod
    def from_pydantic(cls, record: str, exc: Any) -> "RecordValidationError":
        """Wrap a pydantic ValidationError, keeping one entry per failing field."""
        field_errors = []
        for error in exc.errors():
            field_errors.append({
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            })
        return cls(f"Invalid {record}: {len(field_errors)} field error(s)", field_errors)
