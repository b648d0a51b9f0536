"""
Commands for Author business operations.

Example:
    ```python
    @router.get("/authors")
    async def get_authors(repo: AuthorRepoDep, params: AuthorsParamsDep):
        page = await GetAuthorsCommand(repo).execute(params)
        return [AuthorDto.from_entity(author) for author in page]
    ```
"""

from uuid import UUID

from course_library.commands.base import BaseCommand
from course_library.exceptions import NotFoundError, ValidationError
from course_library.logging import logger
from course_library.models.author import Author
from course_library.protocols import AuthorStore
from course_library.schemas.author import AuthorForCreationDto
from course_library.schemas.course import validate_course_for_manipulation
from course_library.schemas.parameters import AuthorsResourceParameters
from course_library.services.patching import group_errors
from course_library.storage.paged_list import PagedList


class GetAuthorsCommand(BaseCommand[AuthorsResourceParameters, PagedList[Author]]):
    """Command to get one page of the author collection."""

    def __init__(self, repository: AuthorStore):
        self.repository = repository

    async def execute(
        self, input_data: AuthorsResourceParameters
    ) -> PagedList[Author]:
        """
        Execute command to get authors.

        Args:
            input_data: Filter, search, sort and paging parameters.

        Returns:
            The requested page with collection-wide metadata.

        Raises:
            InvalidSortFieldError: If order_by names an unmapped field.
        """
        return await self.repository.get_authors(input_data)


class GetAuthorCommand(BaseCommand[UUID, Author]):
    """Command to get a single author."""

    def __init__(self, repository: AuthorStore):
        self.repository = repository

    async def execute(self, input_data: UUID) -> Author:
        """
        Raises:
            NotFoundError: If the author does not exist.
        """
        author = await self.repository.get_by_id(input_data)
        if author is None:
            raise NotFoundError(f"Author {input_data} not found")
        return author


class CreateAuthorCommand(BaseCommand[AuthorForCreationDto, Author]):
    """
    Command to create an author together with its initial courses.

    Every nested course must pass the title/description rule; nothing is
    stored otherwise.
    """

    def __init__(self, repository: AuthorStore):
        self.repository = repository

    async def execute(self, input_data: AuthorForCreationDto) -> Author:
        """
        Execute command to create an author.

        Args:
            input_data: Author data with optional nested courses.

        Returns:
            Created author.

        Raises:
            ValidationError: If a nested course breaks a cross-field rule.
        """
        errors = {}
        for index, course in enumerate(input_data.courses):
            course_errors = group_errors(validate_course_for_manipulation(course))
            for messages in course_errors.values():
                errors.setdefault(f"courses[{index}]", []).extend(messages)
        if errors:
            raise ValidationError(errors)

        author = self.repository.add(input_data.to_entity())
        await self.repository.save()

        logger.info(
            f"Created author {author.id} with {len(input_data.courses)} course(s)"
        )
        return author
