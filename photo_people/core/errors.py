"""Domain errors raised by the person service and its adapters."""


class PersonServiceError(Exception):
    """Base class for errors surfaced to callers of single-entity operations."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PersonServiceError):
    """Entity is absent within the caller's scope."""

    status_code = 404


class BadRequestError(PersonServiceError):
    """Request references something that cannot be acted on."""

    status_code = 400


class StorageError(PersonServiceError):
    """Blob storage failure."""
    pass
