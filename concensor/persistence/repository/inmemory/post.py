"""In-memory post repository for testing."""

from typing import Optional

from concensor.domain.error import NotFoundError
from concensor.domain.model.post import COUNTER_FIELDS, Post
from concensor.domain.repository.post import PostRepository
from concensor.domain.value import CategoryId, PostId, VoteType


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_id_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID (no locking needed in a single process)."""
        return self._posts.get(post_id)

    async def find_published(
        self, category_id: Optional[CategoryId] = None
    ) -> list[Post]:
        """Find published posts, optionally within one category."""
        posts = [p for p in self._posts.values() if p.is_published]
        if category_id is not None:
            posts = [p for p in posts if p.category_id == category_id]
        return posts

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def apply_vote(
        self, post_id: PostId, vote_type: VoteType, vote_value: int
    ) -> Post:
        """Count one vote against a post."""
        post = self._get(post_id)
        field = COUNTER_FIELDS[vote_type]
        updated = post.model_copy(
            update={
                field: getattr(post, field) + 1,
                "total_votes": post.total_votes + 1,
                "weighted_score": post.weighted_score + vote_value,
            }
        )
        self._posts[post_id] = updated
        return updated

    async def increment_comment_count(self, post_id: PostId) -> Post:
        """Increment comment count by 1."""
        post = self._get(post_id)
        updated = post.model_copy(update={"comment_count": post.comment_count + 1})
        self._posts[post_id] = updated
        return updated

    async def update_hot_score(self, post_id: PostId, hot_score: float) -> Post:
        """Store a hot score."""
        updated = self._get(post_id).model_copy(update={"hot_score": hot_score})
        self._posts[post_id] = updated
        return updated

    def _get(self, post_id: PostId) -> Post:
        post = self._posts.get(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post
