from typing import Annotated

from pydantic import BaseModel, Field

from course_library.constants import (
    VALIDATION_PROBLEM_DETAIL,
    VALIDATION_PROBLEM_TITLE,
    VALIDATION_PROBLEM_TYPE,
)
from course_library.schemas.base import CamelModel


class PaginationMetadata(CamelModel):
    """Serialized into the X-Pagination header of collection responses."""

    total_count: Annotated[int, Field(ge=0)]
    page_size: Annotated[int, Field(ge=1)]
    current_page: Annotated[int, Field(ge=1)]
    total_pages: Annotated[int, Field(ge=0)]
    previous_page_link: str | None = None
    next_page_link: str | None = None


class ValidationProblemDetails(BaseModel):  # type: ignore[misc]
    """Problem document returned with 422 responses."""

    type: str = VALIDATION_PROBLEM_TYPE
    title: str = VALIDATION_PROBLEM_TITLE
    status: int = 422
    detail: str = VALIDATION_PROBLEM_DETAIL
    instance: str | None = None
    errors: dict[str, list[str]] = Field(default_factory=dict)
