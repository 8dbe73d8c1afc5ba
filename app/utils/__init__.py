"""
Utility modules for the LightBnB data-access layer.
"""

from .exceptions import (
    DataAccessError,
    RepositoryError,
    DuplicateResourceError,
    DatabaseNotConnectedError,
    RecordValidationError
)
from .currency import to_minor_units

__all__ = [
    # Exceptions
    "DataAccessError",
    "RepositoryError",
    "DuplicateResourceError",
    "DatabaseNotConnectedError",
    "RecordValidationError",

    # Currency
    "to_minor_units",
]
