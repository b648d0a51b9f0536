import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from course_library.constants import (
    AUTHOR_CATEGORY_MAX_LENGTH,
    AUTHOR_NAME_MAX_LENGTH,
)
from course_library.models.base import BaseModel

if TYPE_CHECKING:
    from course_library.models.course import Course


class Author(BaseModel, table=True):
    """
    SQLModel representing an author entity in the database.

    This is a clean data model without Active Record methods.
    Use AuthorRepository for all database operations.

    Attributes:
        id: Primary key, assigned on creation and never changed afterwards
        first_name: Given name
        last_name: Family name
        date_of_birth: Used to derive the author's age
        main_category: Free-text category the author mostly writes about
        courses: Courses owned by the author; the database deletes them
            together with it
    """

    __table_args__ = {"extend_existing": True}

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    first_name: str = Field(max_length=AUTHOR_NAME_MAX_LENGTH)
    last_name: str = Field(max_length=AUTHOR_NAME_MAX_LENGTH)
    date_of_birth: date
    main_category: str = Field(max_length=AUTHOR_CATEGORY_MAX_LENGTH)

    courses: list["Course"] = Relationship(
        back_populates="author",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "passive_deletes": True,
        },
    )
