"""In-memory comment repository for testing."""

from typing import Optional

from concensor.domain.model.comment import Comment
from concensor.domain.repository.comment import CommentRepository
from concensor.domain.value import CommentId, CommentStatus, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = False,
    ) -> list[Comment]:
        """Find all comments for a post in creation order."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        if not include_deleted:
            comments = [c for c in comments if c.status == CommentStatus.PUBLISHED]

        comments.sort(key=lambda c: (c.created_at, str(c.id)))
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment
