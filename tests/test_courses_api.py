"""
HTTP tests for the course endpoints nested under an author.
"""

from uuid import uuid4

import pytest

from tests.mocks.model_factories import make_author, make_course

JSON_PATCH = {"Content-Type": "application/json-patch+json"}


@pytest.fixture
async def author(seed):
    return await seed(make_author())


@pytest.fixture
async def course(seed, author):
    return await seed(
        make_course(author, title="Old title", description="Old description")
    )


def courses_url(author_id, course_id=None):
    url = f"/api/authors/{author_id}/courses"
    return f"{url}/{course_id}" if course_id else url


class TestGetCourses:
    """Tests for GET on the course collection and a single course."""

    @pytest.mark.asyncio
    async def test_lists_courses_of_author(self, client, seed, author):
        other = make_author(first_name="Other")
        await seed(
            make_course(author, title="B course"),
            make_course(author, title="A course"),
            other,
            make_course(other, title="Not mine"),
        )

        response = await client.get(courses_url(author.id))

        assert response.status_code == 200
        assert [c["title"] for c in response.json()] == ["A course", "B course"]
        assert set(response.json()[0]) == {"id", "title", "description", "authorId"}

    @pytest.mark.asyncio
    async def test_missing_author(self, client):
        response = await client.get(courses_url(uuid4()))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_course_of_another_author_is_not_found(self, client, seed, course):
        other = await seed(make_author(first_name="Other"))

        response = await client.get(courses_url(other.id, course.id))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_single_course(self, client, author, course):
        response = await client.get(courses_url(author.id, course.id))

        assert response.status_code == 200
        assert response.json() == {
            "id": str(course.id),
            "title": "Old title",
            "description": "Old description",
            "authorId": str(author.id),
        }

    @pytest.mark.asyncio
    async def test_single_course_as_xml(self, client, author, course):
        response = await client.get(
            courses_url(author.id, course.id), headers={"Accept": "text/xml"}
        )

        assert response.status_code == 200
        assert b"<CourseDto>" in response.content
        assert b"<Title>Old title</Title>" in response.content
        assert f"<AuthorId>{author.id}</AuthorId>".encode() in response.content


class TestCreateCourse:
    """Tests for POST on the course collection."""

    @pytest.mark.asyncio
    async def test_creates_course(self, client, author):
        response = await client.post(
            courses_url(author.id),
            json={"title": "New course", "description": "About things"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["authorId"] == str(author.id)
        assert response.headers["Location"].endswith(
            courses_url(author.id, body["id"])
        )

    @pytest.mark.asyncio
    async def test_missing_title(self, client, author):
        response = await client.post(
            courses_url(author.id), json={"description": "About things"}
        )

        assert response.status_code == 422
        assert response.json()["errors"] == {
            "title": ["You should fill out a title."]
        }

    @pytest.mark.asyncio
    async def test_title_equal_to_description(self, client, author):
        response = await client.post(
            courses_url(author.id), json={"title": "Same", "description": "Same"}
        )

        assert response.status_code == 422
        assert "Course" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_missing_author(self, client):
        response = await client.post(
            courses_url(uuid4()), json={"title": "New", "description": "Text"}
        )

        assert response.status_code == 404


class TestPutCourse:
    """Tests for PUT upserts."""

    @pytest.mark.asyncio
    async def test_updates_existing_course(self, client, author, course):
        response = await client.put(
            courses_url(author.id, course.id),
            json={"title": "New title", "description": "New description"},
        )

        assert response.status_code == 204
        stored = await client.get(courses_url(author.id, course.id))
        assert stored.json()["title"] == "New title"

    @pytest.mark.asyncio
    async def test_creates_course_with_uri_id(self, client, author):
        course_id = uuid4()

        response = await client.put(
            courses_url(author.id, course_id),
            json={"title": "Title", "description": "Description"},
        )

        assert response.status_code == 201
        assert response.json()["id"] == str(course_id)
        assert response.headers["Location"].endswith(
            courses_url(author.id, course_id)
        )

    @pytest.mark.asyncio
    async def test_id_of_another_authors_course_conflicts(
        self, client, seed, course
    ):
        other_author = await seed(make_author("Nancy", "Swashbuckler Rye"))

        response = await client.put(
            courses_url(other_author.id, course.id),
            json={"title": "Title", "description": "Description"},
        )

        assert response.status_code == 409
        assert "detail" in response.json()
        untouched = await client.get(courses_url(course.author_id, course.id))
        assert untouched.json()["title"] == "Old title"

    @pytest.mark.asyncio
    async def test_description_is_required(self, client, author, course):
        response = await client.put(
            courses_url(author.id, course.id), json={"title": "Title"}
        )

        assert response.status_code == 422
        assert response.json()["errors"] == {
            "description": ["You should fill out a description."]
        }


class TestPatchCourse:
    """Tests for PATCH upserts."""

    @pytest.mark.asyncio
    async def test_updates_existing_course(self, client, author, course):
        response = await client.patch(
            courses_url(author.id, course.id),
            json=[{"op": "replace", "path": "/title", "value": "Patched"}],
            headers=JSON_PATCH,
        )

        assert response.status_code == 204
        stored = (await client.get(courses_url(author.id, course.id))).json()
        assert stored["title"] == "Patched"
        assert stored["description"] == "Old description"

    @pytest.mark.asyncio
    async def test_creates_missing_course(self, client, author):
        course_id = uuid4()

        response = await client.patch(
            courses_url(author.id, course_id),
            json=[
                {"op": "add", "path": "/title", "value": "Patched title"},
                {"op": "add", "path": "/description", "value": "Patched text"},
            ],
            headers=JSON_PATCH,
        )

        assert response.status_code == 201
        assert response.json()["id"] == str(course_id)
        assert response.json()["title"] == "Patched title"
        assert "Location" in response.headers

    @pytest.mark.asyncio
    async def test_id_of_another_authors_course_conflicts(
        self, client, seed, course
    ):
        other_author = await seed(make_author("Nancy", "Swashbuckler Rye"))

        response = await client.patch(
            courses_url(other_author.id, course.id),
            json=[
                {"op": "add", "path": "/title", "value": "Title"},
                {"op": "add", "path": "/description", "value": "Text"},
            ],
            headers=JSON_PATCH,
        )

        assert response.status_code == 409
        assert "detail" in response.json()

    @pytest.mark.asyncio
    async def test_title_equal_to_description_is_rejected(
        self, client, author, course
    ):
        response = await client.patch(
            courses_url(author.id, course.id),
            json=[{"op": "replace", "path": "/description", "value": "Old title"}],
            headers=JSON_PATCH,
        )

        assert response.status_code == 422
        assert response.headers["content-type"].startswith(
            "application/problem+json"
        )
        assert "Course" in response.json()["errors"]

        stored = (await client.get(courses_url(author.id, course.id))).json()
        assert stored["description"] == "Old description"

    @pytest.mark.asyncio
    async def test_title_equal_to_description_on_missing_course(
        self, client, author
    ):
        course_id = uuid4()

        response = await client.patch(
            courses_url(author.id, course_id),
            json=[
                {"op": "add", "path": "/title", "value": "Same"},
                {"op": "add", "path": "/description", "value": "Same"},
            ],
            headers=JSON_PATCH,
        )

        assert response.status_code == 422
        assert "Course" in response.json()["errors"]
        missing = await client.get(courses_url(author.id, course_id))
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_path(self, client, author, course):
        response = await client.patch(
            courses_url(author.id, course.id),
            json=[{"op": "replace", "path": "/rating", "value": 5}],
            headers=JSON_PATCH,
        )

        assert response.status_code == 422
        assert "/rating" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_malformed_operation(self, client, author, course):
        response = await client.patch(
            courses_url(author.id, course.id),
            json=[{"op": "swap", "path": "/title"}],
            headers=JSON_PATCH,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_author(self, client):
        response = await client.patch(
            courses_url(uuid4(), uuid4()),
            json=[{"op": "replace", "path": "/title", "value": "x"}],
            headers=JSON_PATCH,
        )

        assert response.status_code == 404


class TestDeleteCourse:
    """Tests for DELETE on a course."""

    @pytest.mark.asyncio
    async def test_deletes_course(self, client, author, course):
        response = await client.delete(courses_url(author.id, course.id))

        assert response.status_code == 204
        missing = await client.get(courses_url(author.id, course.id))
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_course(self, client, author):
        response = await client.delete(courses_url(author.id, uuid4()))

        assert response.status_code == 404
