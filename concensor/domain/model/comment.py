"""Comment entity.

Comments form a forest per post: ``parent_id`` is None for top-level
comments and depth is unbounded.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from concensor.domain.model.common import DomainModel
from concensor.domain.value import CommentId, CommentStatus, PostId, UserId
from concensor.util.time import utcnow


class Comment(DomainModel):
    """Comment on a post or reply to another comment."""

    id: CommentId
    post_id: PostId
    author_id: UserId
    text: str = Field(min_length=1, max_length=5000)
    parent_id: Optional[CommentId] = None
    status: CommentStatus = CommentStatus.PUBLISHED
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_top_level(self) -> bool:
        """Whether the comment replies directly to the post."""
        return self.parent_id is None
