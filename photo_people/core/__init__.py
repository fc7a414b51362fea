"""
Core package initializer.

This package provides the domain error types shared by the service,
storage adapters and HTTP layer.
"""

from .errors import (
    BadRequestError,
    NotFoundError,
    PersonServiceError,
    StorageError,
)

__all__ = [
    "BadRequestError",
    "NotFoundError",
    "PersonServiceError",
    "StorageError",
]
