"""Factories for unsaved Author and Course entities."""

from datetime import date

from course_library.models import Author, Course


def make_author(
    first_name: str = "Berry",
    last_name: str = "Griffin Beak Eldritch",
    date_of_birth: date = date(1980, 7, 23),
    main_category: str = "Ships",
    **kwargs,
) -> Author:
    """Build an unsaved Author with sensible defaults."""
    return Author(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        main_category=main_category,
        **kwargs,
    )


def make_course(
    author: Author,
    title: str = "Commandeering a Ship Without Getting Caught",
    description: str | None = "Commandeering a ship in rough waters isn't easy.",
    **kwargs,
) -> Course:
    """Build an unsaved Course owned by ``author``."""
    return Course(
        title=title, description=description, author_id=author.id, **kwargs
    )
