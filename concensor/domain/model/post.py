"""Post aggregate root.

A post carries the denormalized engagement aggregates the ranking and
consensus views are built from. The five sentiment counters always sum to
``total_votes`` and ``hot_score`` is a cache of the score at the last
recompute, not the current rank.
"""

from datetime import datetime

from pydantic import Field, model_validator

from concensor.domain.model.common import DomainModel
from concensor.domain.value import CategoryId, PostId, PostStatus, UserId, VoteType
from concensor.util.time import utcnow

# Counter field on Post for each sentiment bucket
COUNTER_FIELDS: dict[VoteType, str] = {
    VoteType.STRONGLY_DISAGREE: "strongly_disagree_count",
    VoteType.DISAGREE: "disagree_count",
    VoteType.NEUTRAL: "neutral_count",
    VoteType.AGREE: "agree_count",
    VoteType.STRONGLY_AGREE: "strongly_agree_count",
}


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    author_id: UserId
    category_id: CategoryId
    title: str = Field(min_length=1, max_length=300)
    content: str = ""
    status: PostStatus = PostStatus.PUBLISHED
    strongly_disagree_count: int = Field(default=0, ge=0)
    disagree_count: int = Field(default=0, ge=0)
    neutral_count: int = Field(default=0, ge=0)
    agree_count: int = Field(default=0, ge=0)
    strongly_agree_count: int = Field(default=0, ge=0)
    total_votes: int = Field(default=0, ge=0)
    weighted_score: int = 0
    comment_count: int = Field(default=0, ge=0)
    hot_score: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_vote_totals(self) -> "Post":
        """Sentiment counters must add up to total_votes."""
        if sum(self.count_for(t) for t in VoteType) != self.total_votes:
            raise ValueError("Sentiment counters must sum to total_votes")
        return self

    def count_for(self, vote_type: VoteType) -> int:
        """Number of votes in a sentiment bucket."""
        return getattr(self, COUNTER_FIELDS[vote_type])

    @property
    def is_published(self) -> bool:
        """Whether the post is visible and votable."""
        return self.status == PostStatus.PUBLISHED
