"""Unit tests for row/model mappers."""

from uuid import uuid4

from concensor.domain.model import UserCategoryPoints, Vote
from concensor.domain.value import (
    BadgeLevel,
    CategoryId,
    CategoryPointsId,
    PostId,
    PostStatus,
    UserId,
    VoteId,
    VoteType,
)
from concensor.persistence.mappers import (
    category_points_to_dict,
    post_to_dict,
    row_to_category_points,
    row_to_post,
    row_to_user,
    row_to_vote,
    user_to_dict,
    vote_to_dict,
)
from tests.conftest import T0, make_post, make_user


class TestMappers:
    """Tests for enum and identifier conversion at the database boundary."""

    def test_post_status_is_stored_as_plain_value(self):
        """Enums are converted to their values for SQLAlchemy."""
        post = make_post(
            UserId(uuid4()), CategoryId(uuid4()), agree_count=1, total_votes=1
        )

        data = post_to_dict(post)

        assert data["status"] == "published"
        assert type(data["status"]) is str
        assert row_to_post(data) == post

    def test_post_row_with_string_ids(self):
        """String UUIDs from raw rows are accepted."""
        post = make_post(UserId(uuid4()), CategoryId(uuid4()))
        data = post_to_dict(post)
        data.update(id=str(post.id), status=PostStatus.PUBLISHED.value)

        assert row_to_post(data).id == post.id

    def test_vote_type_is_stored_as_plain_value(self):
        """Vote types are stored by value and parsed back."""
        vote = Vote(
            id=VoteId(uuid4()),
            post_id=PostId(uuid4()),
            voter_id=UserId(uuid4()),
            vote_type=VoteType.STRONGLY_DISAGREE,
            vote_value=-2,
            created_at=T0,
        )

        data = vote_to_dict(vote)

        assert data["vote_type"] == "strongly_disagree"
        assert row_to_vote(data) == vote

    def test_badge_levels_are_stored_as_integers(self):
        """Badge levels go to the database as small integers."""
        row = UserCategoryPoints(
            id=CategoryPointsId(uuid4()),
            user_id=UserId(uuid4()),
            category_id=CategoryId(uuid4()),
            points=600,
            peak_points=600,
            current_badge_level=BadgeLevel.EXPERT,
            peak_badge_level=BadgeLevel.EXPERT,
        )

        data = category_points_to_dict(row)

        assert type(data["current_badge_level"]) is int
        assert row_to_category_points(data).current_badge_level == BadgeLevel.EXPERT

    def test_user_round_trip(self):
        """Usernames are stored as plain strings."""
        user = make_user("dave")

        data = user_to_dict(user)

        assert data["username"] == "dave"
        assert row_to_user(data) == user
