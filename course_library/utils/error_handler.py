"""
Exception handlers turning application errors into HTTP responses.

Route handlers and commands raise AppException subclasses; the handlers
registered here render each one according to its ``http_status``:
- NotFoundError / NotAcceptableError: empty body
- ValidationError: 422 problem document with per-field errors
- other client errors: JSON ``{"detail": message}``
- server errors (5xx): the generic fault response

Request validation failures from FastAPI share the 422 problem document.
Database errors and unexpected exceptions become a generic fault, with full
detail only in development.
"""

import traceback

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from course_library.constants import (
    PROBLEM_JSON_MEDIA_TYPE,
    UNEXPECTED_FAULT_MESSAGE,
)
from course_library.exceptions import (
    AppException,
    NotAcceptableError,
    NotFoundError,
    ValidationError,
)
from course_library.logging import logger
from course_library.schemas.course import COURSE_FIELD_MESSAGES
from course_library.schemas.response import ValidationProblemDetails
from course_library.services.patching import (
    field_errors_from_pydantic,
    group_errors,
)
from course_library.settings import app_settings

# Location prefixes FastAPI puts in front of request validation errors
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def validation_problem_response(
    request: Request, errors: dict[str, list[str]]
) -> JSONResponse:
    """
    Build the 422 problem document for a request.

    Args:
        request: Request that failed validation.
        errors: Messages grouped by field.

    Returns:
        JSONResponse with ``application/problem+json`` content type.
    """
    problem = ValidationProblemDetails(
        instance=request.url.path, errors=errors
    )
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(request: Request, ex: AppException) -> Response:
    logger.warning(
        f"{type(ex).__name__} on {request.method} {request.url.path}: {ex.message}",
        extra={"exception_type": type(ex).__name__},
    )

    if isinstance(ex, ValidationError):
        return validation_problem_response(request, ex.errors)
    if isinstance(ex, (NotFoundError, NotAcceptableError)):
        return Response(status_code=ex.http_status)
    if ex.http_status >= 500:
        return fault_response(ex)
    return JSONResponse(status_code=ex.http_status, content={"detail": ex.message})


async def request_validation_handler(
    request: Request, ex: RequestValidationError
) -> JSONResponse:
    entries = []
    for entry in ex.errors():
        loc = tuple(entry.get("loc", ()))
        if len(loc) > 1 and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        entries.append({**entry, "loc": loc})

    errors = group_errors(
        field_errors_from_pydantic(entries, COURSE_FIELD_MESSAGES)
    )
    logger.info(
        f"Request validation failed on {request.method} {request.url.path}: "
        f"{sorted(errors)}"
    )
    return validation_problem_response(request, errors)


def fault_response(ex: Exception) -> Response:
    """
    Generic 500 response.

    Development responses carry the exception and traceback; other
    environments get a fixed message.
    """
    if app_settings.is_development:
        return JSONResponse(
            status_code=500,
            content={
                "type": type(ex).__name__,
                "detail": str(ex),
                "traceback": traceback.format_exception(ex),
            },
        )
    return PlainTextResponse(UNEXPECTED_FAULT_MESSAGE, status_code=500)


async def database_error_handler(request: Request, ex: SQLAlchemyError) -> Response:
    logger.error(
        f"Database error on {request.method} {request.url.path}: {ex}",
        exc_info=True,
    )
    return fault_response(ex)


async def unhandled_exception_handler(request: Request, ex: Exception) -> Response:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {ex}",
        exc_info=True,
    )
    return fault_response(ex)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every application exception handler to ``app``."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
