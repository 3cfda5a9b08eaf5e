"""Domain value objects."""

from concensor.domain.value.identifiers import (
    CategoryId,
    CategoryPointsId,
    CommentId,
    PostId,
    UserId,
    VoteId,
)
from concensor.domain.value.badge import EquippedBadge
from concensor.domain.value.consensus import ConsensusBreakdown
from concensor.domain.value.types import (
    BadgeLevel,
    CommentStatus,
    PostStatus,
    ReputationAction,
    Username,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    "CategoryId",
    "CategoryPointsId",
    # Types
    "BadgeLevel",
    "CommentStatus",
    "ConsensusBreakdown",
    "EquippedBadge",
    "PostStatus",
    "ReputationAction",
    "Username",
    "VoteType",
]
