"""Create post use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from concensor.domain.service import PostService, ReputationService
from concensor.domain.value import CategoryId, PostStatus, ReputationAction, UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from authenticated user
    category_id: str  # Main category UUID
    title: str
    content: str = ""
    now: datetime | None = None


class CreatePostResponse(BaseModel):
    """Create post response."""

    post_id: str
    category_id: str
    title: str
    status: PostStatus
    total_votes: int
    comment_count: int
    hot_score: float
    created_at: datetime
    author_points: int


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(
        self,
        post_service: PostService,
        reputation_service: ReputationService,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            reputation_service: Reputation domain service
        """
        self.post_service = post_service
        self.reputation_service = reputation_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Check the author exists and the category is a main category
        2. Create the post with zeroed engagement (via PostService)
        3. Award the author post points in the category

        Args:
            request: Create post request

        Returns:
            Create post response with post details

        Raises:
            NotFoundError: If the author or category does not exist
            InvalidArgumentError: If the category is a sub-category
        """
        author_id = UserId(UUID(request.author_id))
        category_id = CategoryId(UUID(request.category_id))

        with logfire.span(
            "create_post.execute",
            author_id=request.author_id,
            category_id=request.category_id,
        ):
            await self.reputation_service.get_user(author_id)
            await self.reputation_service.require_main_category(category_id)

            post = await self.post_service.create_post(
                author_id=author_id,
                category_id=category_id,
                title=request.title,
                content=request.content,
                now=request.now,
            )
            points = await self.reputation_service.award_for_action(
                author_id, category_id, ReputationAction.POST, request.now
            )

            return CreatePostResponse(
                post_id=str(post.id),
                category_id=str(post.category_id),
                title=post.title,
                status=post.status,
                total_votes=post.total_votes,
                comment_count=post.comment_count,
                hot_score=post.hot_score,
                created_at=post.created_at,
                author_points=points.points,
            )
