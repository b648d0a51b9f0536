"""
Dependency injection configuration for FastAPI.

Provides the per-request database session, the repositories built on it,
the shared property mapping service and the parsed author collection
parameters. Everything can be replaced in tests through
``app.dependency_overrides``.

Example:
    ```python
    @router.get("/authors/{author_id}")
    async def get_author(author_id: UUID, repo: AuthorRepoDep) -> AuthorDto:
        ...
    ```
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.constants import DEFAULT_ORDER_BY
from course_library.repositories.author_repository import AuthorRepository
from course_library.repositories.course_repository import CourseRepository
from course_library.schemas.parameters import AuthorsResourceParameters
from course_library.services.property_mapping import PropertyMappingService
from course_library.settings import app_settings
from course_library.storage.db import get_session

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Service Dependencies
# ============================================================================


@lru_cache
def get_property_mapping_service() -> PropertyMappingService:
    """
    Get cached property mapping service.

    The mapping table is immutable, so one instance serves every request.
    """
    return PropertyMappingService()


PropertyMappingDep = Annotated[
    PropertyMappingService, Depends(get_property_mapping_service)
]


# ============================================================================
# Repository Dependencies
# ============================================================================


def get_author_repository(
    session: SessionDep, property_mapping_service: PropertyMappingDep
) -> AuthorRepository:
    return AuthorRepository(session, property_mapping_service)


def get_course_repository(session: SessionDep) -> CourseRepository:
    return CourseRepository(session)


AuthorRepoDep = Annotated[AuthorRepository, Depends(get_author_repository)]
CourseRepoDep = Annotated[CourseRepository, Depends(get_course_repository)]


# ============================================================================
# Query Parameter Dependencies
# ============================================================================


def get_authors_resource_parameters(
    main_category: Annotated[str | None, Query(alias="mainCategory")] = None,
    search_query: Annotated[str | None, Query(alias="searchQuery")] = None,
    page_number: Annotated[int, Query(alias="pageNumber", ge=1)] = 1,
    page_size: Annotated[
        int, Query(alias="pageSize", ge=1)
    ] = app_settings.DEFAULT_PAGE_SIZE,
    order_by: Annotated[str, Query(alias="orderBy")] = DEFAULT_ORDER_BY,
) -> AuthorsResourceParameters:
    """
    Bind the camelCase query string onto AuthorsResourceParameters.

    Range checks happen here so bad input becomes a request validation
    error; page size clamping happens in the model.
    """
    return AuthorsResourceParameters(
        main_category=main_category,
        search_query=search_query,
        page_number=page_number,
        page_size=page_size,
        order_by=order_by,
    )


AuthorsParamsDep = Annotated[
    AuthorsResourceParameters, Depends(get_authors_resource_parameters)
]
