"""
Shared schema building blocks.

``Envelope`` is the uniform success shape returned by every action and
``ItemList`` the payload of every list action.  ``PatchModel`` is the
base class of partial update payloads: the fields a client actually
sent form the patch, every other column is left unchanged.
"""

from typing import Any, ClassVar, Dict, Generic, List, TypeVar

from pydantic import BaseModel, model_validator


T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Success envelope: ``{"success": true, "data": ...}``."""

    success: bool = True
    data: T


class ItemList(BaseModel, Generic[T]):
    """Unpaginated list payload with its count."""

    items: List[T]
    total: int


class PatchModel(BaseModel):
    """Base class for partial updates.

    A field is either present with a value or absent.  Explicit
    ``null`` values are rejected so that "absent" and "cleared" can
    never be confused.  Subclasses that may legitimately be empty set
    ``require_changes = False``.
    """

    require_changes: ClassVar[bool] = True

    @model_validator(mode="after")
    def check_patch(self):
        present = self.model_fields_set
        if self.require_changes and not present:
            raise ValueError("At least one field must be provided to update.")
        nulls = sorted(name for name in present if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields may be omitted but not null: {', '.join(nulls)}")
        return self

    def changes(self) -> Dict[str, Any]:
        """Return ``{column: value}`` for the fields present in the payload."""
        return self.model_dump(exclude_unset=True)
