"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from concensor.domain.model.post import Post
from concensor.domain.value import CategoryId, PostId, VoteType


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID and lock its row until the transaction ends.

        Concurrent writers to the same post serialize on this lock.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_published(
        self, category_id: Optional[CategoryId] = None
    ) -> List[Post]:
        """Find all published posts, optionally within one category.

        Args:
            category_id: Filter by main category (None for all)

        Returns:
            Published posts in no particular order
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def apply_vote(
        self, post_id: PostId, vote_type: VoteType, vote_value: int
    ) -> Post:
        """Atomically count one vote against a post.

        Increments the sentiment counter for ``vote_type`` and ``total_votes``
        by one and adds ``vote_value`` to ``weighted_score``.

        Args:
            post_id: The post ID
            vote_type: Sentiment bucket of the vote
            vote_value: Signed value of the vote

        Returns:
            The post with updated counters
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId) -> Post:
        """Atomically increment a post's comment count by 1.

        Args:
            post_id: The post ID

        Returns:
            The post with the updated count
        """
        pass

    @abstractmethod
    async def update_hot_score(self, post_id: PostId, hot_score: float) -> Post:
        """Store a freshly computed hot score.

        Args:
            post_id: The post ID
            hot_score: Score computed from the post's current counters

        Returns:
            The updated post
        """
        pass
