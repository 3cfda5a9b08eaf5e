"""Vote domain service."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from concensor.domain.error import ConflictError, ForbiddenError
from concensor.domain.model.post import Post
from concensor.domain.model.vote import Vote
from concensor.domain.repository import VoteRepository
from concensor.domain.value import PostId, UserId, VoteId, VoteType
from concensor.util.time import utcnow

from .base import Service
from .post_service import PostService


@dataclass(frozen=True)
class CastVoteResult:
    """Outcome of a successful vote: the new vote and the updated post."""

    vote: Vote
    post: Post


class VoteService(Service):
    """Domain service for sentiment votes.

    Voting is single-shot: one immutable vote per (post, voter).
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
        """
        self.vote_repository = vote_repository
        self.post_service = post_service

    async def cast_vote(
        self,
        post_id: PostId,
        voter_id: UserId,
        vote_type: VoteType,
        now: datetime | None = None,
    ) -> CastVoteResult:
        """Cast a sentiment vote on a post.

        Must run inside the caller's transaction. The post row is locked
        first so concurrent votes on the same post serialize.

        Args:
            post_id: Post ID
            voter_id: Voter's user ID
            vote_type: Sentiment bucket
            now: Vote instant (defaults to current time)

        Returns:
            The created vote and the updated post

        Raises:
            NotFoundError: If the post does not exist or is not published
            ForbiddenError: If the voter is the post's author
            ConflictError: If the voter already voted on this post
        """
        with logfire.span(
            "vote_service.cast_vote",
            post_id=str(post_id),
            voter_id=str(voter_id),
            vote_type=vote_type.value,
        ):
            at = now or utcnow()
            post = await self.post_service.lock_published_post(post_id)

            if post.author_id == voter_id:
                logfire.warn(
                    "Author vote attempt", post_id=str(post_id), voter_id=str(voter_id)
                )
                raise ForbiddenError("Post owner cannot vote on their own post")

            existing = await self.vote_repository.find_by_post_and_voter(
                post_id, voter_id
            )
            if existing:
                logfire.warn(
                    "Duplicate vote attempt",
                    post_id=str(post_id),
                    voter_id=str(voter_id),
                )
                raise ConflictError("Already voted on this post")

            vote = Vote(
                id=VoteId(uuid4()),
                post_id=post_id,
                voter_id=voter_id,
                vote_type=vote_type,
                vote_value=vote_type.value_score,
                created_at=at,
            )

            try:
                saved_vote = await self.vote_repository.save(vote)
            except IntegrityError:
                logfire.warn(
                    "Duplicate vote rejected by store",
                    post_id=str(post_id),
                    voter_id=str(voter_id),
                )
                raise ConflictError("Already voted on this post") from None

            updated_post = await self.post_service.record_vote(post_id, vote_type, at)

            logfire.info(
                "Vote cast",
                post_id=str(post_id),
                voter_id=str(voter_id),
                vote_value=saved_vote.vote_value,
                total_votes=updated_post.total_votes,
            )
            return CastVoteResult(vote=saved_vote, post=updated_post)

    async def get_vote(self, post_id: PostId, voter_id: UserId) -> Vote | None:
        """Get a user's vote on a post.

        Args:
            post_id: Post ID
            voter_id: Voter's user ID

        Returns:
            The vote if the user voted, None otherwise
        """
        with logfire.span(
            "vote_service.get_vote", post_id=str(post_id), voter_id=str(voter_id)
        ):
            return await self.vote_repository.find_by_post_and_voter(post_id, voter_id)

    async def get_votes_by_voter(self, post_id: PostId) -> dict[UserId, VoteType]:
        """Map each voter on a post to the sentiment they chose.

        Args:
            post_id: Post ID

        Returns:
            Vote type keyed by voter ID
        """
        with logfire.span("vote_service.get_votes_by_voter", post_id=str(post_id)):
            votes = await self.vote_repository.find_by_post(post_id)
            return {vote.voter_id: vote.vote_type for vote in votes}
