"""
Base model for all database tables with async relationship support.

Combines SQLModel with SQLAlchemy's AsyncAttrs mixin so lazy-loaded
relationships can be reached through ``awaitable_attrs`` in async code
instead of raising MissingGreenlet.
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import SQLModel


class BaseModel(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """
    Base model for all database tables with async relationship support.

    Usage:
        Preferred approach (eager loading):
            stmt = select(Author).options(selectinload(Author.courses))

        Lazy loading when needed:
            courses = await author.awaitable_attrs.courses
    """

    pass
