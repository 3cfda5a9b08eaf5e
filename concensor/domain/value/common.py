"""Bases for immutable value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Frozen multi-field value, equal when its fields are equal."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Frozen wrapper around one validated primitive.

    ``model_dump()`` yields the bare primitive, so wrapped values map straight
    onto table columns.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
