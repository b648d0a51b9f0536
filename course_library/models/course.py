import uuid
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from course_library.constants import (
    COURSE_DESCRIPTION_MAX_LENGTH,
    COURSE_TITLE_MAX_LENGTH,
)
from course_library.models.base import BaseModel

if TYPE_CHECKING:
    from course_library.models.author import Author


class Course(BaseModel, table=True):
    """
    SQLModel representing a course that belongs to exactly one author.

    The id has a default but may be assigned by the caller, which is how
    PUT and PATCH create a course at a client-chosen URI.
    """

    __table_args__ = {"extend_existing": True}

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(max_length=COURSE_TITLE_MAX_LENGTH)
    description: str | None = Field(
        default=None, max_length=COURSE_DESCRIPTION_MAX_LENGTH
    )
    author_id: uuid.UUID = Field(
        foreign_key="author.id", ondelete="CASCADE", index=True
    )

    author: "Author" = Relationship(back_populates="courses")
