"""In-memory vote repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from concensor.domain.model.vote import Vote
from concensor.domain.repository.vote import VoteRepository
from concensor.domain.value import PostId, UserId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_post_and_voter(
        self, post_id: PostId, voter_id: UserId
    ) -> Optional[Vote]:
        """Find a vote by post and voter."""
        for vote in self._votes:
            if vote.post_id == post_id and vote.voter_id == voter_id:
                return vote
        return None

    async def find_by_post(self, post_id: PostId) -> list[Vote]:
        """Find all votes on a post, oldest first."""
        votes = [v for v in self._votes if v.post_id == post_id]
        votes.sort(key=lambda v: v.created_at)
        return votes

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the voter already voted on the post (duplicate)
        """
        if await self.find_by_post_and_voter(vote.post_id, vote.voter_id):
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote
