"""
Patch application and course validation.

``apply_patch`` runs typed patch operations against a plain projection of a
course (a dict keyed by field name) and collects failures instead of
raising. ``validate_course_update`` then checks the patched projection with
the field rules of CourseForUpdateDto plus the title/description rule. Both
return field-scoped errors so the caller can report them together.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from course_library.models.course import Course
from course_library.schemas.course import (
    COURSE_FIELD_MESSAGES,
    CourseForUpdateDto,
    FieldError,
    validate_course_for_manipulation,
)
from course_library.schemas.patch import (
    PatchAdd,
    PatchCopy,
    PatchMove,
    PatchOperation,
    PatchRemove,
    PatchReplace,
    PatchTest,
)

Projection = dict[str, Any]


def blank_course_projection() -> Projection:
    """Starting point for a PATCH that creates a course."""
    return {"title": "", "description": ""}


def course_projection(course: Course) -> Projection:
    """Project an existing course into the update shape."""
    return {"title": course.title, "description": course.description}


def _resolve_path(projection: Projection, path: str) -> str | None:
    """Map a JSON pointer onto a projection key, case-insensitively."""
    segments = path.strip("/").split("/")
    if len(segments) != 1:
        return None

    segment = segments[0].lower()
    for key in projection:
        if key.lower() == segment:
            return key
    return None


def _path_not_found(path: str) -> FieldError:
    segment = path.strip("/")
    return FieldError(
        field=path,
        message=f"The target location specified by path segment '{segment}' was not found.",
    )


def apply_patch(
    projection: Projection, operations: list[PatchOperation]
) -> tuple[Projection, list[FieldError]]:
    """
    Apply patch operations in order to a copy of ``projection``.

    Application stops at the first failing operation; the operations before
    it stay applied, as they would in a JSON Patch implementation that
    reports into a model state.

    Args:
        projection: Field values to patch. Not modified.
        operations: Parsed patch document.

    Returns:
        The patched copy and the errors raised by the failing operation.
    """
    result = dict(projection)

    for operation in operations:
        key = _resolve_path(result, operation.path)
        if key is None:
            return result, [_path_not_found(operation.path)]

        match operation:
            case PatchAdd() | PatchReplace():
                result[key] = operation.value
            case PatchRemove():
                result[key] = None
            case PatchCopy() | PatchMove():
                source_key = _resolve_path(result, operation.from_)
                if source_key is None:
                    return result, [_path_not_found(operation.from_)]
                result[key] = result[source_key]
                if isinstance(operation, PatchMove) and source_key != key:
                    result[source_key] = None
            case PatchTest():
                if result[key] != operation.value:
                    return result, [
                        FieldError(
                            field=operation.path,
                            message=(
                                f"The current value '{result[key]}' at path "
                                f"'{key}' is not equal to the test value "
                                f"'{operation.value}'."
                            ),
                        )
                    ]

    return result, []


def field_errors_from_pydantic(
    exc: PydanticValidationError | list[dict[str, Any]],
    messages: dict[tuple[str, str], str] | None = None,
) -> list[FieldError]:
    """
    Convert pydantic error entries into field-scoped errors.

    Args:
        exc: A pydantic ValidationError or its ``errors()`` list.
        messages: Optional client-facing messages by (field, error type).

    Returns:
        One FieldError per pydantic error entry.
    """
    entries = exc.errors() if isinstance(exc, PydanticValidationError) else exc
    messages = messages or {}

    errors = []
    for entry in entries:
        field = _format_location(entry.get("loc", ()))
        message = messages.get((field, entry.get("type", "")), entry["msg"])
        errors.append(FieldError(field=field, message=message))
    return errors


def _format_location(loc: tuple[Any, ...]) -> str:
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        elif parts:
            parts.append(f".{part}")
        else:
            parts.append(str(part))
    return "".join(parts)


def validate_course_update(
    projection: Projection,
) -> tuple[CourseForUpdateDto | None, list[FieldError]]:
    """
    Validate a patched projection as a CourseForUpdateDto.

    Args:
        projection: Field values after patching.

    Returns:
        The DTO and no errors when valid, otherwise None and the errors.
    """
    try:
        dto = CourseForUpdateDto.model_validate(projection)
    except PydanticValidationError as exc:
        return None, field_errors_from_pydantic(exc, COURSE_FIELD_MESSAGES)

    errors = validate_course_for_manipulation(dto)
    if errors:
        return None, errors
    return dto, []


def group_errors(errors: list[FieldError]) -> dict[str, list[str]]:
    """Group field errors into the problem document ``errors`` shape."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped
