"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to. The API layer renders all of
them as ``{"success": false, "message": ...}``.
"""


class AppError(Exception):
    """Base class for errors that are reported to the API caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or out-of-policy input."""

    status_code = 400


class NotFoundError(AppError):
    """A referenced record does not exist."""

    status_code = 404


class ConflictError(AppError):
    """The request collides with existing state (double booking, duplicate email)."""

    status_code = 409


class StorageError(AppError):
    """The database failed underneath a unit of work. Always raised after rollback."""

    status_code = 500
