from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.models.course import Course
from course_library.repositories.base import BaseRepository


class CourseRepository(BaseRepository[Course]):
    """Repository for courses, always scoped to their author."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Course)

    async def get_course(self, author_id: UUID, course_id: UUID) -> Course | None:
        """
        Get a course only if it belongs to the given author.

        Args:
            author_id: Owning author.
            course_id: Course primary key.

        Returns:
            Course if found under the author, None otherwise.
        """
        stmt = select(Course).where(
            Course.author_id == author_id, Course.id == course_id
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_courses(self, author_id: UUID) -> list[Course]:
        """Courses of an author ordered by title."""
        stmt = (
            select(Course)
            .where(Course.author_id == author_id)
            .order_by(col(Course.title))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    def add_course(self, author_id: UUID, course: Course) -> Course:
        """Stage a course under an author."""
        course.author_id = author_id
        return self.add(course)
