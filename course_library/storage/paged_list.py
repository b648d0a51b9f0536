"""
Offset-based paged result container.

A PagedList holds one page of entities plus the numbers needed to describe
where that page sits in the whole filtered collection. Total pages and the
previous/next flags are derived from total count, page size and current
page, so they stay correct for pages past the end.
"""

import math
from collections.abc import Iterator, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T")


class PagedList(Generic[T]):
    """
    One page of items plus pagination metadata.

    Example:
        ```python
        page = PagedList(items, total_count=25, current_page=3, page_size=10)
        page.total_pages   # 3
        page.has_previous  # True
        page.has_next      # False
        ```
    """

    def __init__(
        self,
        items: Sequence[T],
        total_count: int,
        current_page: int,
        page_size: int,
    ):
        self.items = list(items)
        self.total_count = total_count
        self.current_page = current_page
        self.page_size = page_size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return (
            f"PagedList(items={len(self.items)}, total_count={self.total_count}, "
            f"current_page={self.current_page}, page_size={self.page_size})"
        )

    @classmethod
    async def create(
        cls,
        session: AsyncSession,
        query: Select[Any],
        page_number: int,
        page_size: int,
    ) -> "PagedList[Any]":
        """
        Count the query's rows, then fetch the requested page.

        Args:
            session: SQLModel async session for database queries.
            query: Select with filters and ordering already applied.
            page_number: Page number (1-indexed).
            page_size: Number of items per page.

        Returns:
            PagedList with the page items and the unpaginated total.

        Raises:
            SQLAlchemyError: If a database query fails.
        """
        count_query = select(func.count()).select_from(
            query.order_by(None).subquery()
        )
        total_result = await session.exec(count_query)
        total_count = total_result.one()

        offset = (page_number - 1) * page_size
        results = await session.exec(query.offset(offset).limit(page_size))

        return cls(results.all(), total_count, page_number, page_size)
