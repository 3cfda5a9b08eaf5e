"""PostgreSQL repository implementations."""

from concensor.persistence.repository.category import PostgresCategoryRepository
from concensor.persistence.repository.category_points import (
    PostgresCategoryPointsRepository,
)
from concensor.persistence.repository.comment import PostgresCommentRepository
from concensor.persistence.repository.post import PostgresPostRepository
from concensor.persistence.repository.user import PostgresUserRepository
from concensor.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCategoryPointsRepository",
    "PostgresCategoryRepository",
    "PostgresCommentRepository",
    "PostgresPostRepository",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
