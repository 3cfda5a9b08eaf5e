"""Domain model entities."""

from concensor.domain.model.category import Category
from concensor.domain.model.category_points import UserCategoryPoints
from concensor.domain.model.comment import Comment
from concensor.domain.model.post import Post
from concensor.domain.model.user import User
from concensor.domain.model.vote import Vote

__all__ = [
    "Category",
    "Comment",
    "Post",
    "User",
    "UserCategoryPoints",
    "Vote",
]
