"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .category_points import InMemoryCategoryPointsRepository
from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCategoryPointsRepository",
    "InMemoryCategoryRepository",
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
