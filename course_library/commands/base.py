"""
Base command for encapsulating business operations.

The Command pattern keeps business rules (existence checks, upsert
decisions, validation) out of route handlers so they can be tested with
mocked repositories.

Example:
    ```python
    class GetAuthorCommand(BaseCommand[UUID, Author]):
        def __init__(self, repository: AuthorStore):
            self.repository = repository

        async def execute(self, input_data: UUID) -> Author:
            author = await self.repository.get_by_id(input_data)
            if author is None:
                raise NotFoundError(f"Author {input_data} not found")
            return author


    @router.get("/authors/{author_id}")
    async def get_author(author_id: UUID, repo: AuthorRepoDep) -> AuthorDto:
        author = await GetAuthorCommand(repo).execute(author_id)
        return AuthorDto.from_entity(author)
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class BaseCommand(ABC, Generic[TInput, TOutput]):
    """
    Base command for business operations.

    Type Parameters:
        TInput: Input data type (usually a Pydantic model).
        TOutput: Output data type.
    """

    @abstractmethod
    async def execute(self, input_data: TInput) -> TOutput:
        """
        Execute the command.

        Args:
            input_data: Input data for the command.

        Returns:
            Result of the command execution.

        Raises:
            AppException: For business rule violations (not found,
                validation failures, invalid sort fields).
        """
        pass
