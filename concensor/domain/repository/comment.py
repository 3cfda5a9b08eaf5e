"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from concensor.domain.model.comment import Comment
from concensor.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Storage for a post's comment forest.

    Comments are read back flat; the thread shape is rebuilt from
    ``parent_id`` by the numbering code.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find all comments on a post as a flat list.

        Args:
            post_id: The post ID
            include_deleted: Whether to include deleted comments

        Returns:
            Comments ordered by ``(created_at, id)``
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass
