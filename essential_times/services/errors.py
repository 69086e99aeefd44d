"""Domain errors raised by the service layer; routes map status_code onto the HTTP response."""


class ServiceError(Exception):
    """Base for failures the caller can act on (bad input, missing record, not allowed)."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailedError(ServiceError):
    """Raised when a required field is missing or a value is malformed."""

    status_code = 400


class PermissionDeniedError(ServiceError):
    """Raised when the caller's role or ownership does not allow the operation."""

    status_code = 403


class NotFoundError(ServiceError):
    """Raised when an id or slug does not resolve to a visible record."""

    status_code = 404


class ConflictError(ServiceError):
    """Raised when a unique field (email, category name/slug) is already taken."""

    status_code = 409


class ImageRejectedError(ServiceError):
    """Raised when an uploaded file is not an image or exceeds the size limit."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code
