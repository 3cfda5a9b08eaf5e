"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_user_vote import (
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetUserVoteRequest",
    "GetUserVoteResponse",
    "GetUserVoteUseCase",
]
