import uuid
from datetime import date

from pydantic import Field

from course_library.constants import (
    AUTHOR_CATEGORY_MAX_LENGTH,
    AUTHOR_NAME_MAX_LENGTH,
)
from course_library.models.author import Author
from course_library.models.course import Course
from course_library.schemas.base import CamelModel
from course_library.schemas.course import CourseForCreationDto
from course_library.utils.dates import get_current_age


class AuthorDto(CamelModel):
    """Outward representation of an author."""

    id: uuid.UUID
    name: str
    age: int
    main_category: str

    @classmethod
    def from_entity(cls, author: Author) -> "AuthorDto":
        return cls(
            id=author.id,
            name=f"{author.first_name} {author.last_name}",
            age=get_current_age(author.date_of_birth),
            main_category=author.main_category,
        )


class AuthorForCreationDto(CamelModel):
    """Payload for creating an author, optionally together with courses."""

    first_name: str = Field(
        ..., min_length=1, max_length=AUTHOR_NAME_MAX_LENGTH
    )
    last_name: str = Field(
        ..., min_length=1, max_length=AUTHOR_NAME_MAX_LENGTH
    )
    date_of_birth: date
    main_category: str = Field(
        ..., min_length=1, max_length=AUTHOR_CATEGORY_MAX_LENGTH
    )
    courses: list[CourseForCreationDto] = Field(default_factory=list)

    def to_entity(self) -> Author:
        """Build the Author entity, including its nested courses."""
        author = Author(
            first_name=self.first_name,
            last_name=self.last_name,
            date_of_birth=self.date_of_birth,
            main_category=self.main_category,
        )
        author.courses = [
            Course(
                title=course.title,
                description=course.description,
                author_id=author.id,
            )
            for course in self.courses
        ]
        return author
