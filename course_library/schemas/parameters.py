from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from course_library.constants import DEFAULT_ORDER_BY, MAX_PAGE_SIZE
from course_library.settings import app_settings


class AuthorsResourceParameters(BaseModel):  # type: ignore[misc]
    """
    Query parameters accepted by the author collection resource.

    Page sizes above MAX_PAGE_SIZE are clamped instead of rejected.

    Example:
        >>> AuthorsResourceParameters(page_size=50).page_size
        20
    """

    main_category: str | None = None
    search_query: str | None = None
    page_number: Annotated[int, Field(ge=1)] = 1
    page_size: Annotated[int, Field(ge=1)] = app_settings.DEFAULT_PAGE_SIZE
    order_by: str = DEFAULT_ORDER_BY

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, value: int) -> int:
        return min(value, MAX_PAGE_SIZE)

    def to_query_params(self, page_number: int | None = None) -> dict[str, str | int]:
        """
        Render the parameters as camelCase query string values.

        Args:
            page_number: Page to point at, defaults to the current one.

        Returns:
            Query parameters with unset filters left out.
        """
        params: dict[str, str | int] = {
            "pageNumber": page_number or self.page_number,
            "pageSize": self.page_size,
        }
        if self.main_category:
            params["mainCategory"] = self.main_category
        if self.search_query:
            params["searchQuery"] = self.search_query
        if self.order_by:
            params["orderBy"] = self.order_by
        return params
