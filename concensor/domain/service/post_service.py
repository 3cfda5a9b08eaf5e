"""Post domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from concensor.config import RankingSettings
from concensor.domain.error import NotFoundError
from concensor.domain.model.post import Post
from concensor.domain.repository import PostRepository
from concensor.domain.value import (
    CategoryId,
    ConsensusBreakdown,
    PostId,
    PostStatus,
    UserId,
    VoteType,
)
from concensor.util.time import utcnow

from .base import Service
from .scoring import hot_score


class PostService(Service):
    """Domain service for post operations.

    Owns the single hot-score refresh step shared by the vote and comment
    paths, so the cached score never drifts from the counters.
    """

    def __init__(
        self, post_repository: PostRepository, ranking: RankingSettings
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            ranking: Hot score tuning
        """
        self.post_repository = post_repository
        self.ranking = ranking

    def score(self, post: Post, now: datetime) -> float:
        """Current hot score of a post at ``now``."""
        return hot_score(
            post.total_votes,
            post.comment_count,
            post.created_at,
            now,
            gravity=self.ranking.gravity,
            time_offset=self.ranking.time_offset,
        )

    async def create_post(
        self,
        author_id: UserId,
        category_id: CategoryId,
        title: str,
        content: str,
        now: datetime | None = None,
    ) -> Post:
        """Create a published post with zeroed engagement.

        Args:
            author_id: Author user ID
            category_id: Main category of the post
            title: Post title
            content: Post body
            now: Creation instant (defaults to current time)

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post",
            author_id=str(author_id),
            category_id=str(category_id),
        ):
            post = Post(
                id=PostId(uuid4()),
                author_id=author_id,
                category_id=category_id,
                title=title,
                content=content,
                status=PostStatus.PUBLISHED,
                created_at=now or utcnow(),
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post:
                logfire.info("Post found", post_id=str(post_id))
            else:
                logfire.warn("Post not found", post_id=str(post_id))
            return post

    async def lock_published_post(self, post_id: PostId) -> Post:
        """Lock a published post's row for a read-modify-write.

        Args:
            post_id: Post ID

        Returns:
            The locked post

        Raises:
            NotFoundError: If the post does not exist or is not published
        """
        post = await self.post_repository.find_by_id_for_update(post_id)
        if post is None or not post.is_published:
            logfire.warn("Published post not found", post_id=str(post_id))
            raise NotFoundError("Post", str(post_id))
        return post

    async def refresh_hot_score(self, post: Post, now: datetime | None = None) -> Post:
        """Recompute and store a post's hot score from its current counters.

        Args:
            post: Post snapshot carrying the just-updated counters
            now: Instant to score at (defaults to current time)

        Returns:
            The post with the stored score
        """
        score = self.score(post, now or utcnow())
        updated = await self.post_repository.update_hot_score(post.id, score)
        logfire.info(
            "Hot score refreshed",
            post_id=str(post.id),
            total_votes=updated.total_votes,
            comment_count=updated.comment_count,
            hot_score=score,
        )
        return updated

    async def record_vote(
        self, post_id: PostId, vote_type: VoteType, now: datetime | None = None
    ) -> Post:
        """Count a vote against a post and refresh its hot score.

        Args:
            post_id: Post ID (row must already be locked)
            vote_type: Sentiment bucket
            now: Instant to score at

        Returns:
            Updated post
        """
        with logfire.span(
            "post_service.record_vote", post_id=str(post_id), vote_type=vote_type.value
        ):
            post = await self.post_repository.apply_vote(
                post_id, vote_type, vote_type.value_score
            )
            return await self.refresh_hot_score(post, now)

    async def record_comment(
        self, post_id: PostId, now: datetime | None = None
    ) -> Post:
        """Count a new comment against a post and refresh its hot score.

        Args:
            post_id: Post ID (row must already be locked)
            now: Instant to score at

        Returns:
            Updated post
        """
        with logfire.span("post_service.record_comment", post_id=str(post_id)):
            post = await self.post_repository.increment_comment_count(post_id)
            return await self.refresh_hot_score(post, now)

    async def list_hot(
        self,
        category_id: CategoryId | None = None,
        limit: int = 30,
        offset: int = 0,
        now: datetime | None = None,
    ) -> list[tuple[Post, float]]:
        """Rank published posts by hot score computed at ``now``.

        The cached ``hot_score`` column is ignored; every post is rescored.

        Args:
            category_id: Restrict to one category (None for all)
            limit: Maximum number of posts
            offset: Number of posts to skip
            now: Ranking instant (defaults to current time)

        Returns:
            (post, score) pairs, highest score first; ties go to newer posts
        """
        with logfire.span(
            "post_service.list_hot",
            category_id=str(category_id) if category_id else None,
            limit=limit,
            offset=offset,
        ):
            at = now or utcnow()
            posts = await self.post_repository.find_published(category_id)
            ranked = sorted(
                ((post, self.score(post, at)) for post in posts),
                key=lambda pair: (pair[1], pair[0].created_at),
                reverse=True,
            )
            logfire.info("Ranked posts", count=len(ranked))
            return ranked[offset : offset + limit]

    @staticmethod
    def consensus(post: Post) -> ConsensusBreakdown:
        """Display breakdown of a post's sentiment votes."""
        return ConsensusBreakdown.from_counts({t: post.count_for(t) for t in VoteType})
