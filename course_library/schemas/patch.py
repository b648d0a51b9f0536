"""
Typed patch operations.

A patch document is a JSON array of operations in the JSON Patch shape
(``{"op": "replace", "path": "/title", "value": "..."}``), parsed into a
tagged union on ``op``.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class PatchOperationBase(BaseModel):  # type: ignore[misc]
    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., description="JSON pointer to the target field")


class PatchAdd(PatchOperationBase):
    """Set the field at ``path`` to ``value``."""

    op: Literal["add"]
    value: Any


class PatchReplace(PatchOperationBase):
    """Replace the value of the field at ``path``."""

    op: Literal["replace"]
    value: Any


class PatchRemove(PatchOperationBase):
    """Clear the field at ``path``."""

    op: Literal["remove"]


class PatchCopy(PatchOperationBase):
    """Copy the value at ``from`` to ``path``."""

    op: Literal["copy"]
    from_: str = Field(..., alias="from")


class PatchMove(PatchOperationBase):
    """Copy the value at ``from`` to ``path`` and clear ``from``."""

    op: Literal["move"]
    from_: str = Field(..., alias="from")


class PatchTest(PatchOperationBase):
    """Fail the document unless the field at ``path`` equals ``value``."""

    op: Literal["test"]
    value: Any


PatchOperation = Annotated[
    Union[PatchAdd, PatchReplace, PatchRemove, PatchCopy, PatchMove, PatchTest],
    Field(discriminator="op"),
]

PatchDocument = list[PatchOperation]

patch_document_adapter: TypeAdapter[PatchDocument] = TypeAdapter(PatchDocument)
