"""List hot posts use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from concensor.domain.service import PostService
from concensor.domain.value import CategoryId, ConsensusBreakdown


class HotPostItem(BaseModel):
    """Post list item in response."""

    post_id: str
    author_id: str
    category_id: str
    title: str
    total_votes: int
    weighted_score: int
    comment_count: int
    hot_score: float  # Computed at the request instant
    consensus: ConsensusBreakdown
    created_at: datetime


class ListHotPostsRequest(BaseModel):
    """List hot posts request."""

    category_id: str | None = None  # Filter by main category
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    now: datetime | None = None


class ListHotPostsResponse(BaseModel):
    """List hot posts response."""

    posts: list[HotPostItem]
    limit: int
    offset: int


class ListHotPostsUseCase:
    """Use case for listing published posts by current hot score."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize list hot posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ListHotPostsRequest) -> ListHotPostsResponse:
        """Execute list hot posts flow.

        Scores are recomputed at ``request.now`` rather than read from the
        stored cache, which is stale as soon as time passes.

        Args:
            request: List hot posts request

        Returns:
            Ranked page of posts
        """
        category_id = (
            CategoryId(UUID(request.category_id)) if request.category_id else None
        )

        with logfire.span(
            "list_hot_posts.execute",
            category_id=request.category_id,
            limit=request.limit,
            offset=request.offset,
        ):
            ranked = await self.post_service.list_hot(
                category_id=category_id,
                limit=request.limit,
                offset=request.offset,
                now=request.now,
            )

            items = [
                HotPostItem(
                    post_id=str(post.id),
                    author_id=str(post.author_id),
                    category_id=str(post.category_id),
                    title=post.title,
                    total_votes=post.total_votes,
                    weighted_score=post.weighted_score,
                    comment_count=post.comment_count,
                    hot_score=score,
                    consensus=PostService.consensus(post),
                    created_at=post.created_at,
                )
                for post, score in ranked
            ]

            return ListHotPostsResponse(
                posts=items, limit=request.limit, offset=request.offset
            )
