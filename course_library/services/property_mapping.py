"""
Property mapping between public sort keys and storage fields.

Clients sort the author collection by the names they see on the DTO
(``Name``, ``Age``, ...). The service translates those names into the entity
columns to order by, so storage field names never leak into the API.

Example:
    ```python
    service = PropertyMappingService()
    sort = service.resolve_sort(AuthorDto, Author, "mainCategory, age desc")
    # [SortInstruction(field="main_category", descending=False),
    #  SortInstruction(field="date_of_birth", descending=False)]
    ```
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from course_library.exceptions import (
    InvalidSortFieldError,
    PropertyMappingNotFoundError,
)
from course_library.logging import logger
from course_library.models.author import Author
from course_library.schemas.author import AuthorDto

K = TypeVar("K", bound=Enum)


class PropertyMappingValue(BaseModel):  # type: ignore[misc]
    """
    Storage fields behind one public sort key.

    Attributes:
        destination_properties: Entity columns, in sort priority order.
        revert: Flip the requested direction. Age ascending means date of
            birth descending, for instance.
    """

    model_config = ConfigDict(frozen=True)

    destination_properties: tuple[str, ...]
    revert: bool = False


class SortInstruction(BaseModel):  # type: ignore[misc]
    """One ORDER BY term on a storage field."""

    model_config = ConfigDict(frozen=True)

    field: str
    descending: bool = False


class AuthorSortField(str, Enum):
    """Sortable fields of the author resource."""

    ID = "Id"
    MAIN_CATEGORY = "MainCategory"
    AGE = "Age"
    NAME = "Name"


class PropertyMapping(Generic[K]):
    """
    Mapping table for one (source, destination) pair.

    Keys are members of an enum of sortable fields; lookups by client-supplied
    names are case-insensitive.
    """

    def __init__(
        self,
        source: type[Any],
        destination: type[Any],
        mapping: dict[K, PropertyMappingValue],
    ):
        self.source = source
        self.destination = destination
        self.mapping = mapping
        self._by_name = {key.value.lower(): key for key in mapping}

    def lookup(self, name: str) -> PropertyMappingValue | None:
        key = self._by_name.get(name.strip().lower())
        if key is None:
            return None
        return self.mapping[key]


author_property_mapping: PropertyMapping[AuthorSortField] = PropertyMapping(
    AuthorDto,
    Author,
    {
        AuthorSortField.ID: PropertyMappingValue(destination_properties=("id",)),
        AuthorSortField.MAIN_CATEGORY: PropertyMappingValue(
            destination_properties=("main_category",)
        ),
        AuthorSortField.AGE: PropertyMappingValue(
            destination_properties=("date_of_birth",), revert=True
        ),
        AuthorSortField.NAME: PropertyMappingValue(
            destination_properties=("last_name", "first_name")
        ),
    },
)


def parse_order_by(expression: str | None) -> list[tuple[str, bool]]:
    """
    Split an order-by expression into (field, descending) clauses.

    Clauses are comma separated; a clause is a field name optionally
    followed by ``desc`` (any case). Blank clauses are skipped.

    Example:
        >>> parse_order_by("name desc, age")
        [('name', True), ('age', False)]
    """
    if not expression or not expression.strip():
        return []

    clauses = []
    for raw_clause in expression.split(","):
        clause = raw_clause.strip()
        if not clause:
            continue
        tokens = clause.split()
        descending = len(tokens) > 1 and tokens[1].lower() == "desc"
        clauses.append((tokens[0], descending))
    return clauses


class PropertyMappingService:
    """
    Registry of property mappings.

    The default registry holds the author mapping; tests and future
    resources can pass their own list.
    """

    def __init__(self, mappings: list[PropertyMapping[Any]] | None = None):
        self._mappings = (
            mappings if mappings is not None else [author_property_mapping]
        )

    def get_property_mapping(
        self, source: type[Any], destination: type[Any]
    ) -> PropertyMapping[Any]:
        """
        Get the mapping registered for a source/destination pair.

        Raises:
            PropertyMappingNotFoundError: If exactly one mapping is not
                registered for the pair.
        """
        matches = [
            mapping
            for mapping in self._mappings
            if mapping.source is source and mapping.destination is destination
        ]
        if len(matches) == 1:
            return matches[0]

        raise PropertyMappingNotFoundError(source, destination)

    def valid_mapping_exists_for(
        self, source: type[Any], destination: type[Any], fields: str | None
    ) -> bool:
        """Whether every field of an order-by expression is mapped."""
        mapping = self.get_property_mapping(source, destination)
        return all(
            mapping.lookup(name) is not None
            for name, _ in parse_order_by(fields)
        )

    def resolve_sort(
        self, source: type[Any], destination: type[Any], order_by: str | None
    ) -> list[SortInstruction]:
        """
        Translate an order-by expression into storage sort instructions.

        Each clause expands to one instruction per destination property;
        the effective direction is the requested one flipped when the
        mapping is marked ``revert``.

        Args:
            source: Type whose field names the client uses.
            destination: Entity type being sorted.
            order_by: Expression such as ``"name desc, age"``.

        Returns:
            Sort instructions in clause order.

        Raises:
            InvalidSortFieldError: If a clause names an unmapped field.
        """
        mapping = self.get_property_mapping(source, destination)

        instructions: list[SortInstruction] = []
        for name, descending in parse_order_by(order_by):
            value = mapping.lookup(name)
            if value is None:
                logger.debug(f"Rejected sort on unmapped field '{name}'")
                raise InvalidSortFieldError(name)

            for destination_property in value.destination_properties:
                instructions.append(
                    SortInstruction(
                        field=destination_property,
                        descending=descending != value.revert,
                    )
                )
        return instructions
