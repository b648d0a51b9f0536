"""
Repository for Author entity with the collection query pipeline.

``get_authors`` runs filter → search → sort → paginate. The sort expression
is resolved through the property mapping service before any SQL is built,
so an unmapped sort field never reaches the database.

Example:
    ```python
    async with async_session() as session:
        repo = AuthorRepository(session)
        page = await repo.get_authors(
            AuthorsResourceParameters(main_category="History", page_size=5)
        )
        print(page.total_count, page.has_next)
    ```
"""

from uuid import UUID

from sqlalchemy import Select, func, or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.logging import logger
from course_library.models.author import Author
from course_library.repositories.base import BaseRepository
from course_library.schemas.author import AuthorDto
from course_library.schemas.parameters import AuthorsResourceParameters
from course_library.services.property_mapping import (
    PropertyMappingService,
    SortInstruction,
)
from course_library.storage.paged_list import PagedList


def apply_main_category_filter(query: Select, main_category: str | None) -> Select:
    """Keep authors whose main category equals the filter, ignoring case and padding."""
    if not main_category or not main_category.strip():
        return query

    value = main_category.strip()
    return query.where(
        func.lower(func.trim(col(Author.main_category))) == func.lower(value)
    )


def apply_search(query: Select, search_query: str | None) -> Select:
    """
    Keep authors whose main category or name contains the search text.

    The name is matched on first name, last name and "first last", so a
    query spanning both parts still matches.
    """
    if not search_query or not search_query.strip():
        return query

    value = search_query.strip()
    full_name = col(Author.first_name) + " " + col(Author.last_name)
    return query.where(
        or_(
            col(Author.main_category).icontains(value, autoescape=True),
            col(Author.first_name).icontains(value, autoescape=True),
            col(Author.last_name).icontains(value, autoescape=True),
            full_name.icontains(value, autoescape=True),
        )
    )


def apply_sort(query: Select, sort: list[SortInstruction]) -> Select:
    """Order by the resolved instructions, then by id for a stable order."""
    for instruction in sort:
        column = col(getattr(Author, instruction.field))
        query = query.order_by(
            column.desc() if instruction.descending else column.asc()
        )
    return query.order_by(col(Author.id).asc())


class AuthorRepository(BaseRepository[Author]):
    """
    Repository for Author entity operations.

    Provides CRUD operations inherited from BaseRepository plus the
    paged collection query.
    """

    def __init__(
        self,
        session: AsyncSession,
        property_mapping_service: PropertyMappingService | None = None,
    ):
        """
        Initialize Author repository.

        Args:
            session: Database session for executing queries.
            property_mapping_service: Resolves sort expressions. A default
                service is created when not given.
        """
        super().__init__(session, Author)
        self.property_mapping_service = (
            property_mapping_service or PropertyMappingService()
        )

    async def author_exists(self, author_id: UUID) -> bool:
        return await self.exists(id=author_id)

    async def get_authors(
        self, params: AuthorsResourceParameters
    ) -> PagedList[Author]:
        """
        Get one page of authors matching the resource parameters.

        Args:
            params: Filter, search, sort and paging parameters.

        Returns:
            PagedList whose total count covers the filtered set.

        Raises:
            InvalidSortFieldError: If order_by names an unmapped field.
            SQLAlchemyError: If a database query fails.
        """
        sort = self.property_mapping_service.resolve_sort(
            AuthorDto, Author, params.order_by
        )

        query = select(Author)
        query = apply_main_category_filter(query, params.main_category)
        query = apply_search(query, params.search_query)
        query = apply_sort(query, sort)

        page = await PagedList.create(
            self.session, query, params.page_number, params.page_size
        )
        logger.debug(f"Fetched authors {page!r}")
        return page
