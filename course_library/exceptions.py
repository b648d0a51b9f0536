"""
Custom exception classes for the application.

Every exception carries the HTTP status it is rendered with, so route
handlers raise domain errors and the exception handlers registered in
course_library.utils.error_handler turn them into responses.
"""

from typing import Any


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class NotFoundError(AppException):
    """
    Resource not found.

    Raised when a referenced author or course does not exist. Rendered as
    404 with an empty body.
    """

    http_status = 404


class ValidationError(AppException):
    """
    Data validation failed.

    Raised when a resource fails field-level or cross-field validation, or
    when a patch document cannot be applied. Rendered as a 422 problem
    document.

    Attributes:
        errors: Mapping of field name to the list of messages for that field.
    """

    http_status = 422

    def __init__(
        self,
        errors: dict[str, list[str]],
        message: str = "One or more validation errors occurred.",
    ):
        self.errors = errors
        super().__init__(message)


class InvalidSortFieldError(AppException):
    """
    Unmapped order-by field.

    Raised before any query is built when a client sorts on a field the
    property mapping does not know.
    """

    http_status = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Mapping doesn't exist for {field}")


class PropertyMappingNotFoundError(AppException):
    """
    No property mapping is registered for a source/destination pair.

    This is a programming error, so it is rendered as a server fault.
    """

    http_status = 500

    def __init__(self, source: type[Any], destination: type[Any]):
        super().__init__(
            f"Cannot find exact property mapping instance for "
            f"<{source.__name__},{destination.__name__}>"
        )


class ConflictError(AppException):
    """
    The request clashes with a resource that already exists.

    Raised when PUT or PATCH would create a course under one author with an
    id already used by a course of another author.
    """

    http_status = 409


class NotAcceptableError(AppException):
    """
    None of the media types in the Accept header can be produced.

    Rendered as 406 with an empty body.
    """

    http_status = 406


class DatabaseError(AppException):
    """
    Database operation failed.

    Raised when saving the unit of work fails.
    """

    http_status = 500
