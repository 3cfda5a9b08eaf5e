"""Shared base for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen pydantic entity.

    Repositories hand out snapshots; a change is a ``model_copy(update=...)``
    that is written back through the owning repository.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
