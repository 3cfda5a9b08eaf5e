"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from concensor.domain.model import (
    Category,
    Comment,
    Post,
    User,
    UserCategoryPoints,
    Vote,
)
from concensor.domain.value import (
    BadgeLevel,
    CategoryId,
    CategoryPointsId,
    CommentId,
    CommentStatus,
    PostId,
    PostStatus,
    UserId,
    Username,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    equipped = _optional_uuid(row.get("equipped_badge_category_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        total_points=row["total_points"],
        peak_points=row["peak_points"],
        equipped_badge_category_id=CategoryId(equipped) if equipped else None,
        last_login_date=row.get("last_login_date"),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model."""
    parent_id = _optional_uuid(row.get("parent_id"))
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        slug=row["slug"],
        parent_id=CategoryId(parent_id) if parent_id else None,
        created_at=row["created_at"],
    )


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        category_id=CategoryId(_uuid(row["category_id"])),
        title=row["title"],
        content=row.get("content") or "",
        status=PostStatus(row["status"]),
        strongly_disagree_count=row["strongly_disagree_count"],
        disagree_count=row["disagree_count"],
        neutral_count=row["neutral_count"],
        agree_count=row["agree_count"],
        strongly_agree_count=row["strongly_agree_count"],
        total_votes=row["total_votes"],
        weighted_score=row["weighted_score"],
        comment_count=row["comment_count"],
        hot_score=row["hot_score"],
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = post.model_dump()
    data["status"] = post.status.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        text=row["text"],
        parent_id=CommentId(parent_id) if parent_id else None,
        status=CommentStatus(row["status"]),
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump()
    data["status"] = comment.status.value
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        voter_id=UserId(_uuid(row["voter_id"])),
        vote_type=VoteType(row["vote_type"]),
        vote_value=row["vote_value"],
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion
    """
    data = vote.model_dump()
    data["vote_type"] = vote.vote_type.value
    return data


def row_to_category_points(row: Dict[str, Any]) -> UserCategoryPoints:
    """Convert database row to UserCategoryPoints domain model."""
    return UserCategoryPoints(
        id=CategoryPointsId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        category_id=CategoryId(_uuid(row["category_id"])),
        points=row["points"],
        peak_points=row["peak_points"],
        current_badge_level=BadgeLevel(row["current_badge_level"]),
        peak_badge_level=BadgeLevel(row["peak_badge_level"]),
        last_login_date=row.get("last_login_date"),
    )


def category_points_to_dict(row: UserCategoryPoints) -> Dict[str, Any]:
    """Convert UserCategoryPoints domain model to database dict.

    Badge levels are stored as plain integers.
    """
    data = row.model_dump()
    data["current_badge_level"] = int(row.current_badge_level)
    data["peak_badge_level"] = int(row.peak_badge_level)
    return data
