"""
Commands for Course business operations.

Every command checks that the author exists before touching courses, so a
missing author always wins over a missing course. PUT and PATCH are
upserts: they update the course when it exists and otherwise create it
under the id from the URI.
"""

from typing import NamedTuple
from uuid import UUID

from pydantic import BaseModel, Field

from course_library.commands.base import BaseCommand
from course_library.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from course_library.logging import logger
from course_library.models.course import Course
from course_library.protocols import AuthorStore, CourseStore
from course_library.schemas.course import (
    CourseForCreationDto,
    CourseForUpdateDto,
    validate_course_for_manipulation,
)
from course_library.schemas.patch import PatchOperation
from course_library.services.patching import (
    apply_patch,
    blank_course_projection,
    course_projection,
    group_errors,
    validate_course_update,
)
from course_library.utils.metrics import course_upserts_total


# ============================================================================
# Input/Output Models
# ============================================================================


class CourseLookupInput(BaseModel):  # type: ignore[misc]
    """Identifies a course under an author."""

    author_id: UUID
    course_id: UUID


class CreateCourseInput(BaseModel):  # type: ignore[misc]
    """Input model for creating a course with a generated id."""

    author_id: UUID
    course: CourseForCreationDto


class UpsertCourseInput(CourseLookupInput):
    """Input model for PUT: full replacement or creation."""

    course: CourseForUpdateDto


class PatchCourseInput(CourseLookupInput):
    """Input model for PATCH: patch operations applied in order."""

    operations: list[PatchOperation] = Field(default_factory=list)


class UpsertResult(NamedTuple):
    """Outcome of an upsert: the stored course and whether it was created."""

    course: Course
    created: bool


# ============================================================================
# Commands
# ============================================================================


class _CourseCommand:
    def __init__(
        self, author_repository: AuthorStore, course_repository: CourseStore
    ):
        """
        Args:
            author_repository: Used for the author existence check.
            course_repository: Course data access.
        """
        self.author_repository = author_repository
        self.course_repository = course_repository

    async def ensure_author_exists(self, author_id: UUID) -> None:
        if not await self.author_repository.author_exists(author_id):
            raise NotFoundError(f"Author {author_id} not found")

    async def get_course_or_raise(self, author_id: UUID, course_id: UUID) -> Course:
        course = await self.course_repository.get_course(author_id, course_id)
        if course is None:
            raise NotFoundError(
                f"Course {course_id} not found for author {author_id}"
            )
        return course

    async def ensure_course_id_available(
        self, target: CourseLookupInput, operation: str
    ) -> None:
        """Raise ConflictError if another author's course uses the id."""
        owner = await self.course_repository.get_by_id(target.course_id)
        if owner is not None:
            course_upserts_total.labels(
                operation=operation, outcome="conflict"
            ).inc()
            raise ConflictError(
                f"Course {target.course_id} belongs to another author"
            )


class GetCoursesCommand(_CourseCommand, BaseCommand[UUID, list[Course]]):
    """Command to list an author's courses."""

    async def execute(self, input_data: UUID) -> list[Course]:
        await self.ensure_author_exists(input_data)
        return await self.course_repository.get_courses(input_data)


class GetCourseCommand(_CourseCommand, BaseCommand[CourseLookupInput, Course]):
    """Command to get one course of an author."""

    async def execute(self, input_data: CourseLookupInput) -> Course:
        await self.ensure_author_exists(input_data.author_id)
        return await self.get_course_or_raise(
            input_data.author_id, input_data.course_id
        )


class CreateCourseCommand(_CourseCommand, BaseCommand[CreateCourseInput, Course]):
    """Command to create a course under an author."""

    async def execute(self, input_data: CreateCourseInput) -> Course:
        """
        Raises:
            NotFoundError: If the author does not exist.
            ValidationError: If title and description are equal.
        """
        await self.ensure_author_exists(input_data.author_id)

        errors = validate_course_for_manipulation(input_data.course)
        if errors:
            raise ValidationError(group_errors(errors))

        course = self.course_repository.add_course(
            input_data.author_id, input_data.course.to_entity(input_data.author_id)
        )
        await self.course_repository.save()
        return course


class UpsertCourseCommand(_CourseCommand, BaseCommand[UpsertCourseInput, UpsertResult]):
    """
    Command behind PUT.

    Replaces every updatable field of an existing course, or creates the
    course with the caller-supplied id.
    """

    async def execute(self, input_data: UpsertCourseInput) -> UpsertResult:
        """
        Raises:
            NotFoundError: If the author does not exist.
            ValidationError: If title and description are equal.
            ConflictError: If another author's course has the id.
        """
        await self.ensure_author_exists(input_data.author_id)

        errors = validate_course_for_manipulation(input_data.course)
        if errors:
            course_upserts_total.labels(operation="put", outcome="invalid").inc()
            raise ValidationError(group_errors(errors))

        course = await self.course_repository.get_course(
            input_data.author_id, input_data.course_id
        )
        if course is None:
            await self.ensure_course_id_available(input_data, "put")

        return await _store(
            self.course_repository, input_data, input_data.course, course, "put"
        )


class PatchCourseCommand(_CourseCommand, BaseCommand[PatchCourseInput, UpsertResult]):
    """
    Command behind PATCH.

    The operations are applied to the update projection of the existing
    course, or to a blank projection when the course does not exist. The
    result is validated before anything is stored; patch application errors
    and validation errors are reported together.
    """

    async def execute(self, input_data: PatchCourseInput) -> UpsertResult:
        """
        Raises:
            NotFoundError: If the author does not exist.
            ValidationError: If an operation cannot be applied or the
                patched course is invalid.
            ConflictError: If another author's course has the id.
        """
        await self.ensure_author_exists(input_data.author_id)

        course = await self.course_repository.get_course(
            input_data.author_id, input_data.course_id
        )
        if course is None:
            await self.ensure_course_id_available(input_data, "patch")

        projection = (
            course_projection(course)
            if course is not None
            else blank_course_projection()
        )

        patched, patch_errors = apply_patch(projection, input_data.operations)
        dto, validation_errors = validate_course_update(patched)

        errors = patch_errors + validation_errors
        if errors or dto is None:
            course_upserts_total.labels(operation="patch", outcome="invalid").inc()
            logger.info(
                f"Rejected patch for course {input_data.course_id}: "
                f"{len(errors)} error(s)"
            )
            raise ValidationError(group_errors(errors))

        return await _store(self.course_repository, input_data, dto, course, "patch")


class DeleteCourseCommand(_CourseCommand, BaseCommand[CourseLookupInput, None]):
    """Command to delete a course of an author."""

    async def execute(self, input_data: CourseLookupInput) -> None:
        """
        Raises:
            NotFoundError: If the author or the course does not exist.
        """
        await self.ensure_author_exists(input_data.author_id)
        course = await self.get_course_or_raise(
            input_data.author_id, input_data.course_id
        )

        await self.course_repository.delete(course)
        await self.course_repository.save()


async def _store(
    repository: CourseStore,
    target: CourseLookupInput,
    dto: CourseForUpdateDto,
    existing: Course | None,
    operation: str,
) -> UpsertResult:
    """Create or update a course from a validated update DTO and save."""
    if existing is None:
        course = repository.add_course(
            target.author_id, dto.to_entity(target.author_id, target.course_id)
        )
        await repository.save()
        course_upserts_total.labels(operation=operation, outcome="created").inc()
        logger.info(f"Created course {course.id} through {operation.upper()}")
        return UpsertResult(course=course, created=True)

    dto.apply_to(existing)
    await repository.update(existing)
    await repository.save()
    course_upserts_total.labels(operation=operation, outcome="updated").inc()
    return UpsertResult(course=existing, created=False)
