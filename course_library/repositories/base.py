"""
Base repository with common CRUD operations.

The Repository pattern separates data access logic from business logic.
Repositories stage changes on the session; ``save()`` commits the unit of
work so a request either persists everything it changed or nothing.

Example:
    ```python
    class CourseRepository(BaseRepository[Course]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, Course)

        async def get_courses(self, author_id: UUID) -> list[Course]:
            stmt = select(Course).where(Course.author_id == author_id)
            result = await self.session.exec(stmt)
            return list(result.all())
    ```
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.exceptions import DatabaseError
from course_library.logging import logger

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Type Parameters:
        T: The SQLModel type this repository manages.

    Attributes:
        session: The database session for executing queries.
        model: The SQLModel class this repository manages.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """
        Initialize repository with session and model.

        Args:
            session: Database session for executing queries.
            model: The SQLModel class to manage.
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: Any) -> T | None:
        """
        Get entity by primary key.

        Args:
            id: Primary key value.

        Returns:
            Entity if found, None otherwise.
        """
        return await self.session.get(self.model, id)

    def add(self, entity: T) -> T:
        """
        Stage a new entity; it is written on the next flush or ``save()``.

        Args:
            entity: The entity instance to add.

        Returns:
            The same entity.
        """
        self.session.add(entity)
        return entity

    async def update(self, entity: T) -> T:
        """
        Flush changes made to a tracked entity.

        Args:
            entity: The entity instance with updated values.

        Returns:
            The updated entity.

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            return entity
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating {self.model.__name__}: {e}")
            raise

    async def delete(self, entity: T) -> None:
        """
        Delete entity from database.

        Args:
            entity: The entity instance to delete.

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        try:
            await self.session.delete(entity)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting {self.model.__name__}: {e}")
            raise

    async def exists(self, **filters: Any) -> bool:
        """
        Check if entity exists matching the provided filters.

        Args:
            **filters: Field name and value pairs to filter by.

        Returns:
            True if at least one entity matches, False otherwise.

        Raises:
            SQLAlchemyError: If database query fails.
        """
        try:
            stmt = select(self.model)
            for key, value in filters.items():
                if value is not None:
                    stmt = stmt.where(getattr(self.model, key) == value)
            result = await self.session.exec(stmt.limit(1))
            return result.first() is not None
        except SQLAlchemyError as e:
            logger.error(
                f"Error checking existence of {self.model.__name__}: {e}"
            )
            raise

    async def save(self) -> None:
        """
        Commit the unit of work.

        Raises:
            DatabaseError: If the commit fails; the session is rolled back.
        """
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error saving {self.model.__name__} changes: {e}")
            raise DatabaseError(f"Could not save {self.model.__name__} changes") from e
