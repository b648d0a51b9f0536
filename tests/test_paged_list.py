"""Tests for PagedList metadata and creation from a query."""

import pytest
from sqlmodel import col, select

from course_library.models.author import Author
from course_library.storage.paged_list import PagedList
from tests.mocks.model_factories import make_author


class TestPagedListMetadata:
    """Tests for derived pagination properties."""

    def test_last_partial_page(self):
        page = PagedList(["a"] * 5, total_count=25, current_page=3, page_size=10)

        assert len(page) == 5
        assert page.total_pages == 3
        assert page.has_previous
        assert not page.has_next

    def test_first_page(self):
        page = PagedList(["a"] * 10, total_count=25, current_page=1, page_size=10)

        assert not page.has_previous
        assert page.has_next

    def test_empty_collection(self):
        page = PagedList([], total_count=0, current_page=1, page_size=10)

        assert page.total_pages == 0
        assert not page.has_previous
        assert not page.has_next

    def test_page_past_the_end(self):
        page = PagedList([], total_count=5, current_page=4, page_size=10)

        assert page.total_pages == 1
        assert page.has_previous
        assert not page.has_next

    def test_iterates_items(self):
        page = PagedList([1, 2, 3], total_count=3, current_page=1, page_size=3)

        assert list(page) == [1, 2, 3]


class TestPagedListCreate:
    """Tests for PagedList.create against a real session."""

    @pytest.mark.asyncio
    async def test_counts_whole_query_and_slices_page(self, seed, db_session):
        await seed(
            *[make_author(last_name=f"Author {i:02d}") for i in range(12)]
        )
        query = select(Author).order_by(col(Author.last_name))

        page = await PagedList.create(db_session, query, 2, 5)

        assert page.total_count == 12
        assert page.total_pages == 3
        assert [author.last_name for author in page] == [
            f"Author {i:02d}" for i in range(5, 10)
        ]
