"""
Course transport models and their validation rules.

Field rules are declared on the models; the title/description rule is a
separate predicate, ``validate_course_for_manipulation``, which callers run
explicitly once a DTO exists.
"""

import uuid

from pydantic import BaseModel, Field

from course_library.constants import (
    COURSE_DESCRIPTION_MAX_LENGTH,
    COURSE_TITLE_MAX_LENGTH,
)
from course_library.models.course import Course
from course_library.schemas.base import CamelModel

# Error key used for rules spanning several course fields
COURSE_ERROR_KEY = "Course"
TITLE_DESCRIPTION_CONFLICT = (
    "The provided description should be different from the title."
)

# Client-facing messages by (field, pydantic error type)
COURSE_FIELD_MESSAGES: dict[tuple[str, str], str] = {
    ("title", "missing"): "You should fill out a title.",
    ("title", "string_type"): "You should fill out a title.",
    ("title", "string_too_short"): "You should fill out a title.",
    (
        "title",
        "string_too_long",
    ): f"The title shouldn't have more than {COURSE_TITLE_MAX_LENGTH} characters.",
    ("description", "missing"): "You should fill out a description.",
    ("description", "string_type"): "You should fill out a description.",
    (
        "description",
        "string_too_long",
    ): f"The description shouldn't have more than {COURSE_DESCRIPTION_MAX_LENGTH} characters.",
}


class FieldError(BaseModel):  # type: ignore[misc]
    """A validation message scoped to one field (or to the whole object)."""

    field: str
    message: str


class CourseDto(CamelModel):
    """Outward representation of a course."""

    id: uuid.UUID
    title: str
    description: str | None = None
    author_id: uuid.UUID

    @classmethod
    def from_entity(cls, course: Course) -> "CourseDto":
        return cls(
            id=course.id,
            title=course.title,
            description=course.description,
            author_id=course.author_id,
        )


class CourseForManipulationDto(CamelModel):
    """Fields shared by the creation and update payloads."""

    title: str = Field(
        ..., min_length=1, max_length=COURSE_TITLE_MAX_LENGTH
    )
    description: str | None = Field(
        default="", max_length=COURSE_DESCRIPTION_MAX_LENGTH
    )

    def to_entity(
        self, author_id: uuid.UUID, course_id: uuid.UUID | None = None
    ) -> Course:
        course = Course(
            title=self.title,
            description=self.description,
            author_id=author_id,
        )
        if course_id is not None:
            course.id = course_id
        return course


class CourseForCreationDto(CourseForManipulationDto):
    """Payload for POST; the description may be omitted."""


class CourseForUpdateDto(CourseForManipulationDto):
    """Payload for PUT and the projection patched by PATCH."""

    description: str = Field(..., max_length=COURSE_DESCRIPTION_MAX_LENGTH)

    def apply_to(self, course: Course) -> Course:
        """Copy the updatable fields onto an existing course."""
        course.title = self.title
        course.description = self.description
        return course


def validate_course_for_manipulation(
    dto: CourseForManipulationDto,
) -> list[FieldError]:
    """
    Cross-field rule: the description must differ from the title.

    Args:
        dto: A course payload that already passed field validation.

    Returns:
        Errors found, empty when the payload is valid.
    """
    if dto.title == dto.description:
        return [
            FieldError(
                field=COURSE_ERROR_KEY, message=TITLE_DESCRIPTION_CONFLICT
            )
        ]
    return []
