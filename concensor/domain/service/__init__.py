"""Domain services."""

from .base import Service
from .comment_numbering import NumberedComment, flatten, number_comments
from .comment_service import CommentService
from .post_service import PostService
from .reputation_service import (
    ReputationService,
    badge_level_for_points,
    calculate_decayed_points,
    points_for_next_level,
)
from .scoring import hot_score
from .vote_service import CastVoteResult, VoteService

__all__ = [
    "CastVoteResult",
    "CommentService",
    "NumberedComment",
    "PostService",
    "ReputationService",
    "Service",
    "VoteService",
    "badge_level_for_points",
    "calculate_decayed_points",
    "flatten",
    "hot_score",
    "number_comments",
    "points_for_next_level",
]
