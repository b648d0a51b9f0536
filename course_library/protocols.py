"""
Protocol classes for structural subtyping (duck typing with type safety).

Commands depend on these protocols instead of concrete repositories, so
tests can hand them any object with the right methods.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable
from uuid import UUID

from course_library.models.author import Author
from course_library.models.course import Course
from course_library.schemas.parameters import AuthorsResourceParameters
from course_library.storage.paged_list import PagedList

T = TypeVar("T")


@runtime_checkable
class Repository(Protocol[T]):
    """
    Protocol for the unit-of-work repository pattern.

    Type Parameters:
        T: The entity type this repository manages.
    """

    async def get_by_id(self, id: Any) -> T | None: ...

    def add(self, entity: T) -> T: ...

    async def update(self, entity: T) -> T: ...

    async def delete(self, entity: T) -> None: ...

    async def exists(self, **filters: Any) -> bool: ...

    async def save(self) -> None: ...


@runtime_checkable
class AuthorStore(Repository[Author], Protocol):
    """Author storage: CRUD plus existence checks and the paged query."""

    async def author_exists(self, author_id: UUID) -> bool: ...

    async def get_authors(
        self, params: AuthorsResourceParameters
    ) -> PagedList[Author]: ...


@runtime_checkable
class CourseStore(Repository[Course], Protocol):
    """Course storage scoped by author."""

    async def get_course(
        self, author_id: UUID, course_id: UUID
    ) -> Course | None: ...

    async def get_courses(self, author_id: UUID) -> list[Course]: ...

    def add_course(self, author_id: UUID, course: Course) -> Course: ...
