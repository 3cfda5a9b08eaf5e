"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from concensor.domain.repository.category import CategoryRepository
from concensor.domain.repository.category_points import CategoryPointsRepository
from concensor.domain.repository.comment import CommentRepository
from concensor.domain.repository.post import PostRepository
from concensor.domain.repository.user import UserRepository
from concensor.domain.repository.vote import VoteRepository

__all__ = [
    "CategoryRepository",
    "CategoryPointsRepository",
    "CommentRepository",
    "PostRepository",
    "UserRepository",
    "VoteRepository",
]
