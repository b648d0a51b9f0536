"""
Course endpoints, nested under their author.

PUT and PATCH upsert: a course id that does not exist yet under the author
is created with that id (201 with the representation), an existing course
is updated in place (204).
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Request, Response, status
from fastapi.responses import JSONResponse

from course_library.commands.course_commands import (
    CourseLookupInput,
    CreateCourseCommand,
    CreateCourseInput,
    DeleteCourseCommand,
    GetCourseCommand,
    GetCoursesCommand,
    PatchCourseCommand,
    PatchCourseInput,
    UpsertCourseCommand,
    UpsertCourseInput,
    UpsertResult,
)
from course_library.dependencies import AuthorRepoDep, CourseRepoDep
from course_library.schemas.course import (
    CourseDto,
    CourseForCreationDto,
    CourseForUpdateDto,
)
from course_library.schemas.patch import PatchOperation
from course_library.utils.content_negotiation import ContentNegotiationRoute

router = APIRouter(
    prefix="/api/authors/{author_id}/courses",
    tags=["courses"],
    route_class=ContentNegotiationRoute,
)


def course_location(request: Request, author_id: UUID, course_id: UUID) -> str:
    return str(
        request.url_for(
            "get_course_for_author",
            author_id=str(author_id),
            course_id=str(course_id),
        )
    )


def upsert_response(
    request: Request, author_id: UUID, result: UpsertResult
) -> Response:
    """201 with body and Location for a created course, 204 otherwise."""
    if not result.created:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    dto = CourseDto.from_entity(result.course)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=dto.model_dump(mode="json", by_alias=True),
        headers={"Location": course_location(request, author_id, dto.id)},
    )


@router.get(
    "",
    response_model=list[CourseDto],
    summary="Get the courses of an author",
)
async def get_courses_for_author(
    author_id: UUID, author_repo: AuthorRepoDep, course_repo: CourseRepoDep
) -> list[CourseDto]:
    courses = await GetCoursesCommand(author_repo, course_repo).execute(author_id)
    return [CourseDto.from_entity(course) for course in courses]


@router.get(
    "/{course_id}",
    name="get_course_for_author",
    response_model=CourseDto,
    summary="Get a course of an author",
)
async def get_course_for_author(
    author_id: UUID,
    course_id: UUID,
    author_repo: AuthorRepoDep,
    course_repo: CourseRepoDep,
) -> CourseDto:
    course = await GetCourseCommand(author_repo, course_repo).execute(
        CourseLookupInput(author_id=author_id, course_id=course_id)
    )
    return CourseDto.from_entity(course)


@router.post(
    "",
    response_model=CourseDto,
    status_code=status.HTTP_201_CREATED,
    summary="Create a course for an author",
)
async def create_course_for_author(
    author_id: UUID,
    course_data: CourseForCreationDto,
    request: Request,
    response: Response,
    author_repo: AuthorRepoDep,
    course_repo: CourseRepoDep,
) -> CourseDto:
    """
    Create a course with a generated id.

    Example:
        POST /api/authors/{author_id}/courses
        {"title": "Commandeering a Ship", "description": "In this course..."}
    """
    course = await CreateCourseCommand(author_repo, course_repo).execute(
        CreateCourseInput(author_id=author_id, course=course_data)
    )

    response.headers["Location"] = course_location(request, author_id, course.id)
    return CourseDto.from_entity(course)


@router.put(
    "/{course_id}",
    response_model=CourseDto,
    summary="Replace or create a course",
)
async def update_course_for_author(
    author_id: UUID,
    course_id: UUID,
    course_data: CourseForUpdateDto,
    request: Request,
    author_repo: AuthorRepoDep,
    course_repo: CourseRepoDep,
) -> Response:
    result = await UpsertCourseCommand(author_repo, course_repo).execute(
        UpsertCourseInput(
            author_id=author_id, course_id=course_id, course=course_data
        )
    )
    return upsert_response(request, author_id, result)


@router.patch(
    "/{course_id}",
    response_model=CourseDto,
    summary="Partially update or create a course",
)
async def partially_update_course_for_author(
    author_id: UUID,
    course_id: UUID,
    operations: Annotated[list[PatchOperation], Body()],
    request: Request,
    author_repo: AuthorRepoDep,
    course_repo: CourseRepoDep,
) -> Response:
    """
    Apply a JSON Patch document to a course.

    Example:
        PATCH /api/authors/{author_id}/courses/{course_id}
        Content-Type: application/json-patch+json
        [{"op": "replace", "path": "/title", "value": "Updated title"}]
    """
    result = await PatchCourseCommand(author_repo, course_repo).execute(
        PatchCourseInput(
            author_id=author_id, course_id=course_id, operations=operations
        )
    )
    return upsert_response(request, author_id, result)


@router.delete(
    "/{course_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a course",
)
async def delete_course_for_author(
    author_id: UUID,
    course_id: UUID,
    author_repo: AuthorRepoDep,
    course_repo: CourseRepoDep,
) -> Response:
    await DeleteCourseCommand(author_repo, course_repo).execute(
        CourseLookupInput(author_id=author_id, course_id=course_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
