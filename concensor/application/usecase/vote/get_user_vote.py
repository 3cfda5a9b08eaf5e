"""Get user vote use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from concensor.domain.service import VoteService
from concensor.domain.value import PostId, UserId, VoteType


class GetUserVoteRequest(BaseModel):
    """Get user vote request."""

    post_id: str
    user_id: str


class GetUserVoteResponse(BaseModel):
    """Get user vote response; ``vote_type`` is None when the user has not voted."""

    post_id: str
    has_voted: bool
    vote_type: VoteType | None = None
    vote_value: int | None = None
    created_at: datetime | None = None


class GetUserVoteUseCase:
    """Use case for looking up a user's vote on a post."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize get user vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: GetUserVoteRequest) -> GetUserVoteResponse:
        """Execute get user vote flow."""
        vote = await self.vote_service.get_vote(
            PostId(UUID(request.post_id)), UserId(UUID(request.user_id))
        )
        if vote is None:
            return GetUserVoteResponse(post_id=request.post_id, has_voted=False)

        return GetUserVoteResponse(
            post_id=request.post_id,
            has_voted=True,
            vote_type=vote.vote_type,
            vote_value=vote.vote_value,
            created_at=vote.created_at,
        )
