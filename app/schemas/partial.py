"""
Base schema for partial updates.

Fields left out of the payload keep their stored value.  Fields named in
``non_nullable`` back NOT NULL columns: they may be omitted but an
explicit ``null`` is a validation error (422) rather than a failed write.
"""

from typing import ClassVar, Self

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """Base for ``*Update`` schemas applied with :meth:`changes`."""

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> Self:
        nulls = [name for name in self.non_nullable
                 if name in self.model_fields_set and getattr(self, name) is None]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)
