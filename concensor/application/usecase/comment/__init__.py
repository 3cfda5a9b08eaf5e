"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .get_comments import (
    CommentItem,
    EquippedBadgeItem,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "EquippedBadgeItem",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
]
