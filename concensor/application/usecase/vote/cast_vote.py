"""Cast vote use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from concensor.application.usecase.base import BaseUseCase
from concensor.domain.service import PostService, ReputationService, VoteService
from concensor.domain.value import (
    ConsensusBreakdown,
    PostId,
    ReputationAction,
    UserId,
    VoteType,
)


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    post_id: str  # UUID string
    voter_id: str  # User ID from authenticated user
    vote_type: str  # Parsed into VoteType by the use case
    now: datetime | None = None


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    vote_id: str
    post_id: str
    vote_type: VoteType
    vote_value: int
    created_at: datetime
    total_votes: int
    weighted_score: int
    hot_score: float
    consensus: ConsensusBreakdown
    voter_points: int


class CastVoteUseCase(BaseUseCase):
    """Use case for casting a sentiment vote on a post.

    Voting also earns the voter reputation in the post's category, in the
    same transaction as the vote.
    """

    def __init__(
        self,
        vote_service: VoteService,
        reputation_service: ReputationService,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            reputation_service: Reputation domain service
        """
        self.vote_service = vote_service
        self.reputation_service = reputation_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The new vote with the post's updated aggregates

        Raises:
            InvalidArgumentError: If the vote type is unknown
            NotFoundError: If the post does not exist or is not published
            ForbiddenError: If the voter authored the post
            ConflictError: If the voter already voted
        """
        vote_type = VoteType.parse(request.vote_type)
        post_id = PostId(UUID(request.post_id))
        voter_id = UserId(UUID(request.voter_id))

        with logfire.span(
            "cast_vote.execute", post_id=request.post_id, vote_type=vote_type.value
        ):
            result = await self.vote_service.cast_vote(
                post_id, voter_id, vote_type, request.now
            )
            points = await self.reputation_service.award_for_action(
                voter_id,
                result.post.category_id,
                ReputationAction.VOTE,
                request.now,
            )

            return CastVoteResponse(
                vote_id=str(result.vote.id),
                post_id=str(result.post.id),
                vote_type=result.vote.vote_type,
                vote_value=result.vote.vote_value,
                created_at=result.vote.created_at,
                total_votes=result.post.total_votes,
                weighted_score=result.post.weighted_score,
                hot_score=result.post.hot_score,
                consensus=PostService.consensus(result.post),
                voter_points=points.points,
            )
