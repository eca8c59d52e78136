class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class NotFoundError(DomainError):
    """Raised when a lookup by id finds nothing."""

    status_code = 404


class StorageError(DomainError):
    """Raised when the database is unreachable, times out or rejects an operation."""

    status_code = 503
