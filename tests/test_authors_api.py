"""
HTTP tests for the author endpoints.
"""

import json
from datetime import date

import pytest

from tests.mocks.model_factories import make_author, make_course


class TestGetAuthors:
    """Tests for GET /api/authors."""

    @pytest.mark.asyncio
    async def test_lists_authors_with_pagination_header(self, client, seed):
        await seed(
            *[
                make_author(last_name=f"Historian {i:02d}", main_category="History")
                for i in range(25)
            ]
        )

        response = await client.get(
            "/api/authors",
            params={"mainCategory": "History", "pageNumber": 2, "pageSize": 10},
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 10
        assert set(body[0]) == {"id", "name", "age", "mainCategory"}

        metadata = json.loads(response.headers["X-Pagination"])
        assert metadata["totalCount"] == 25
        assert metadata["pageSize"] == 10
        assert metadata["currentPage"] == 2
        assert metadata["totalPages"] == 3
        assert "pageNumber=1" in metadata["previousPageLink"]
        assert "pageNumber=3" in metadata["nextPageLink"]
        assert "mainCategory=History" in metadata["nextPageLink"]

    @pytest.mark.asyncio
    async def test_single_page_has_no_links(self, client, seed):
        await seed(make_author())

        response = await client.get("/api/authors")

        metadata = json.loads(response.headers["X-Pagination"])
        assert metadata["previousPageLink"] is None
        assert metadata["nextPageLink"] is None

    @pytest.mark.asyncio
    async def test_page_size_is_clamped(self, client, seed):
        await seed(*[make_author(last_name=f"Author {i:02d}") for i in range(25)])

        response = await client.get("/api/authors", params={"pageSize": 50})

        assert len(response.json()) == 20
        assert json.loads(response.headers["X-Pagination"])["pageSize"] == 20

    @pytest.mark.asyncio
    async def test_author_dto_shape(self, client, seed):
        author = await seed(
            make_author("Jane", "Austen", date(1975, 12, 16), "Romance")
        )

        response = await client.get("/api/authors")

        assert response.json()[0]["id"] == str(author.id)
        assert response.json()[0]["name"] == "Jane Austen"
        assert response.json()[0]["mainCategory"] == "Romance"

    @pytest.mark.asyncio
    async def test_unmapped_sort_field_is_bad_request(self, client):
        response = await client.get("/api/authors", params={"orderBy": "dateOfBirth"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_page_number(self, client):
        response = await client.get("/api/authors", params={"pageNumber": 0})

        assert response.status_code == 422
        assert "pageNumber" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_head_returns_headers_only(self, client, seed):
        await seed(make_author())

        response = await client.head("/api/authors")

        assert response.status_code == 200
        assert response.content == b""
        assert "X-Pagination" in response.headers

    @pytest.mark.asyncio
    async def test_xml_representation(self, client, seed):
        await seed(make_author("Jane", "Austen", date(1975, 12, 16), "Romance"))

        response = await client.get(
            "/api/authors", headers={"Accept": "application/xml"}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert b"<ArrayOfAuthorDto>" in response.content
        assert b"<Name>Jane Austen</Name>" in response.content
        assert "X-Pagination" in response.headers

    @pytest.mark.asyncio
    async def test_unsupported_accept_is_not_acceptable(self, client):
        response = await client.get("/api/authors", headers={"Accept": "text/csv"})

        assert response.status_code == 406
        assert response.content == b""


class TestGetAuthor:
    """Tests for GET /api/authors/{author_id}."""

    @pytest.mark.asyncio
    async def test_found(self, client, seed):
        author = await seed(make_author())

        response = await client.get(f"/api/authors/{author.id}")

        assert response.status_code == 200
        assert response.json()["id"] == str(author.id)

    @pytest.mark.asyncio
    async def test_missing(self, client):
        response = await client.get(
            "/api/authors/00000000-0000-0000-0000-000000000001"
        )

        assert response.status_code == 404
        assert response.content == b""


class TestCreateAuthor:
    """Tests for POST /api/authors."""

    @pytest.mark.asyncio
    async def test_creates_author_with_courses(self, client):
        response = await client.post(
            "/api/authors",
            json={
                "firstName": "Jane",
                "lastName": "Austen",
                "dateOfBirth": "1975-12-16",
                "mainCategory": "Romance",
                "courses": [{"title": "Irony", "description": "Reading closely"}],
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Jane Austen"
        assert response.headers["Location"].endswith(f"/api/authors/{body['id']}")

        courses = await client.get(f"/api/authors/{body['id']}/courses")
        assert [course["title"] for course in courses.json()] == ["Irony"]

    @pytest.mark.asyncio
    async def test_missing_fields(self, client):
        response = await client.post("/api/authors", json={"firstName": "Jane"})

        assert response.status_code == 422
        assert response.headers["content-type"].startswith(
            "application/problem+json"
        )
        body = response.json()
        assert body["title"] == "One or more validation errors occurred."
        assert "lastName" in body["errors"]

    @pytest.mark.asyncio
    async def test_nested_course_conflict(self, client):
        response = await client.post(
            "/api/authors",
            json={
                "firstName": "Jane",
                "lastName": "Austen",
                "dateOfBirth": "1975-12-16",
                "mainCategory": "Romance",
                "courses": [{"title": "Same", "description": "Same"}],
            },
        )

        assert response.status_code == 422
        assert "courses[0]" in response.json()["errors"]


class TestAuthorsOptions:
    """Tests for OPTIONS /api/authors."""

    @pytest.mark.asyncio
    async def test_allow_header(self, client):
        response = await client.options("/api/authors")

        assert response.status_code == 200
        assert response.headers["Allow"] == "GET,HEAD,POST,OPTIONS"


class TestAuthorDeletionCascade:
    """Deleting an author removes its courses."""

    @pytest.mark.asyncio
    async def test_courses_removed_with_author(self, seed, session_factory):
        from sqlmodel import select

        from course_library.models import Author, Course

        author = make_author()
        await seed(author, make_course(author))

        async with session_factory() as session:
            stored = await session.get(Author, author.id)
            await session.delete(stored)
            await session.commit()

        async with session_factory() as session:
            remaining = await session.exec(select(Course))
            assert remaining.all() == []
