"""Category entity.

Categories form a two-level tree. Reputation is tracked per main category
(``parent_id`` is None); sub-categories only group posts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from concensor.domain.model.common import DomainModel
from concensor.domain.value import CategoryId
from concensor.util.time import utcnow


class Category(DomainModel):
    """Category entity, read-only for the engine."""

    id: CategoryId
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100)
    parent_id: Optional[CategoryId] = None
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_main(self) -> bool:
        """Whether this is a top-level category that carries badges."""
        return self.parent_id is None
