"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from concensor.domain.error import NotFoundError
from concensor.domain.service import CommentService, PostService, ReputationService
from concensor.domain.value import CommentId, PostId, ReputationAction, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    text: str
    parent_id: str | None = None  # UUID string for replies
    now: datetime | None = None


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    parent_id: str | None
    text: str
    created_at: datetime
    comment_count: int
    hot_score: float


class CreateCommentUseCase:
    """Use case for creating a comment or reply."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        reputation_service: ReputationService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            reputation_service: Reputation domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.reputation_service = reputation_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment with the post's updated engagement

        Raises:
            NotFoundError: If the post does not exist or is not published
            InvalidArgumentError: If the parent comment is invalid
        """
        post_id = PostId(UUID(request.post_id))
        author_id = UserId(UUID(request.author_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=author_id,
            text=request.text,
            parent_id=parent_id,
            now=request.now,
        )

        post = await self.post_service.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", request.post_id)

        await self.reputation_service.award_for_action(
            author_id, post.category_id, ReputationAction.COMMENT, request.now
        )

        return CreateCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            text=comment.text,
            created_at=comment.created_at,
            comment_count=post.comment_count,
            hot_score=post.hot_score,
        )
