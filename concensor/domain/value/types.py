"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum

from pydantic import field_validator

from concensor.domain.error import InvalidArgumentError
from concensor.domain.value.common import RootValueObject


class VoteType(str, Enum):
    """Five-bucket sentiment vote.

    Each bucket maps bijectively to a signed value in -2..2.
    """

    STRONGLY_DISAGREE = "strongly_disagree"
    DISAGREE = "disagree"
    NEUTRAL = "neutral"
    AGREE = "agree"
    STRONGLY_AGREE = "strongly_agree"

    @property
    def value_score(self) -> int:
        """Signed value contributed to a post's weighted score."""
        return _VOTE_VALUES[self]

    @classmethod
    def from_value_score(cls, value: int) -> "VoteType":
        """Inverse of ``value_score``."""
        for vote_type, score in _VOTE_VALUES.items():
            if score == value:
                return vote_type
        raise InvalidArgumentError(f"Invalid vote value: {value}")

    @classmethod
    def parse(cls, raw: str) -> "VoteType":
        """Parse a raw vote type string.

        Raises:
            InvalidArgumentError: If the string is not a known vote type
        """
        try:
            return cls(raw)
        except ValueError:
            raise InvalidArgumentError(f"Invalid vote type: {raw!r}") from None


_VOTE_VALUES: dict[VoteType, int] = {
    VoteType.STRONGLY_DISAGREE: -2,
    VoteType.DISAGREE: -1,
    VoteType.NEUTRAL: 0,
    VoteType.AGREE: 1,
    VoteType.STRONGLY_AGREE: 2,
}


class PostStatus(str, Enum):
    """Publication status of a post. Only published posts accept votes."""

    PUBLISHED = "published"
    DELETED = "deleted"


class CommentStatus(str, Enum):
    """Publication status of a comment."""

    PUBLISHED = "published"
    DELETED = "deleted"


class BadgeLevel(IntEnum):
    """Per-category reputation tier.

    Level 1 is the floor every user holds; there is no level 0.
    """

    ROOKIE = 1
    APPRENTICE = 2
    EXPERT = 3
    MASTER = 4
    LEGEND = 5

    @property
    def label(self) -> str:
        """Human-readable badge name."""
        return self.name.capitalize()


class ReputationAction(str, Enum):
    """Actions that earn reputation points in a category."""

    VOTE = "vote"
    POST = "post"
    COMMENT = "comment"


class Username(RootValueObject[str]):
    """Display name of a user.

    Letters, digits, underscores and hyphens, 3-30 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9_-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '_' or '-'"
            )
        return v
