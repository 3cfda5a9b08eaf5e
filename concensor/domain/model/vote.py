"""Vote entity.

Each user casts at most one sentiment vote per post. Votes are immutable:
there is no change or retract operation.
"""

from datetime import datetime

from pydantic import Field, model_validator

from concensor.domain.model.common import DomainModel
from concensor.domain.value import PostId, UserId, VoteId, VoteType
from concensor.util.time import utcnow


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per (post, voter), enforced by a unique constraint
    - vote_value is always vote_type.value_score
    - Authors never vote on their own posts
    """

    id: VoteId
    post_id: PostId
    voter_id: UserId
    vote_type: VoteType
    vote_value: int = Field(ge=-2, le=2)
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_vote_value(self) -> "Vote":
        """vote_value must match the sentiment bucket."""
        if self.vote_value != self.vote_type.value_score:
            raise ValueError(
                f"vote_value {self.vote_value} does not match {self.vote_type.value}"
            )
        return self
