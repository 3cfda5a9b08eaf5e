"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from concensor.domain.model.vote import Vote
from concensor.domain.value import PostId, UserId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Votes are insert-only: there is no update or delete.
    """

    @abstractmethod
    async def find_by_post_and_voter(
        self, post_id: PostId, voter_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a post.

        Args:
            post_id: The post ID
            voter_id: The voter's user ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Vote]:
        """Find all votes on a post.

        Args:
            post_id: The post ID

        Returns:
            Votes on the post, oldest first
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a new vote.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the voter already voted on this post
        """
        pass
