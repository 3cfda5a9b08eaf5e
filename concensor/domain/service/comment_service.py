"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from concensor.domain.error import InvalidArgumentError
from concensor.domain.model.comment import Comment
from concensor.domain.repository import CommentRepository
from concensor.domain.value import CommentId, CommentStatus, PostId, UserId
from concensor.util.time import utcnow

from .base import Service
from .comment_numbering import NumberedComment, number_comments
from .post_service import PostService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self, comment_repository: CommentRepository, post_service: PostService
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post domain service
        """
        self.comment_repository = comment_repository
        self.post_service = post_service

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        text: str,
        parent_id: CommentId | None = None,
        now: datetime | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        The post's comment count and hot score are updated in the same
        transaction.

        Args:
            post_id: Post ID
            author_id: Author user ID
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)
            now: Creation instant (defaults to current time)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post does not exist or is not published
            InvalidArgumentError: If the parent comment is invalid
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            at = now or utcnow()
            await self.post_service.lock_published_post(post_id)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent or parent.status != CommentStatus.PUBLISHED:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise InvalidArgumentError("Parent comment not found")
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise InvalidArgumentError(
                        "Parent comment does not belong to this post"
                    )

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                text=text,
                parent_id=parent_id,
                status=CommentStatus.PUBLISHED,
                created_at=at,
            )

            saved = await self.comment_repository.save(comment)
            post = await self.post_service.record_comment(post_id, at)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                comment_count=post.comment_count,
            )
            return saved

    async def get_comments_for_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> list[Comment]:
        """Get all comments for a post in creation order.

        Args:
            post_id: Post ID
            include_deleted: Whether to include deleted comments

        Returns:
            Flat list of comments
        """
        with logfire.span(
            "comment_service.get_comments_for_post",
            post_id=str(post_id),
            include_deleted=include_deleted,
        ):
            comments = await self.comment_repository.find_by_post(
                post_id=post_id,
                include_deleted=include_deleted,
            )
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_numbered_comments(self, post_id: PostId) -> list[NumberedComment]:
        """Get a post's published comments as a numbered forest."""
        comments = await self.get_comments_for_post(post_id)
        return number_comments(comments)
