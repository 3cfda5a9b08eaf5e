"""Hot score calculation.

Time-decay ranking over engagement:

    score = (total_votes + 2 * comment_count) / (age_hours + time_offset) ** gravity

The score falls continuously with wall-clock time even without new
engagement, so a stored score is only valid for the instant it was computed.
Anything that needs the current ranking recomputes it here.
"""

from datetime import datetime

# Each comment counts as this many votes
COMMENT_WEIGHT = 2

DEFAULT_GRAVITY = 1.8
DEFAULT_TIME_OFFSET = 2.0


def engagement(total_votes: int, comment_count: int) -> int:
    """Weighted engagement count of a post."""
    return total_votes + COMMENT_WEIGHT * comment_count


def age_in_hours(created_at: datetime, now: datetime) -> float:
    """Age of a post in hours, clamped at 0 for clock skew."""
    return max(0.0, (now - created_at).total_seconds() / 3600)


def hot_score(
    total_votes: int,
    comment_count: int,
    created_at: datetime,
    now: datetime,
    *,
    gravity: float = DEFAULT_GRAVITY,
    time_offset: float = DEFAULT_TIME_OFFSET,
) -> float:
    """Compute a post's hot score at instant ``now``.

    Args:
        total_votes: Number of votes on the post (any sentiment)
        comment_count: Number of comments on the post
        created_at: When the post was created
        now: Instant to score at
        gravity: Decay exponent; higher favours recency
        time_offset: Hours added to age so new posts stay finite

    Returns:
        Non-negative score; 0 when there is no engagement
    """
    points = engagement(total_votes, comment_count)
    if points == 0:
        return 0.0
    return points / (age_in_hours(created_at, now) + time_offset) ** gravity
