"""Unit tests for CastVoteUseCase and GetUserVoteUseCase."""

from uuid import uuid4

import pytest

from concensor.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    GetUserVoteRequest,
    GetUserVoteUseCase,
)
from concensor.domain.error import ConflictError, InvalidArgumentError
from concensor.domain.repository import (
    CategoryRepository,
    PostRepository,
    UserRepository,
)
from concensor.domain.service import ReputationService
from concensor.domain.value import VoteType
from tests.conftest import T0, make_category, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(env):
    users = await env.get(UserRepository)
    categories = await env.get(CategoryRepository)
    posts = await env.get(PostRepository)

    author = await users.save(make_user("author"))
    voter = await users.save(make_user("voter"))
    category = categories.add(make_category("Politics"))
    post = await posts.save(make_post(author.id, category.id))
    return voter, category, post


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_cast_vote_returns_aggregates_and_awards_voter(self, unit_env):
        """Voting updates the post and earns the voter a point in its category."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        reputation = await unit_env.get(ReputationService)
        voter, category, post = await _seed(unit_env)

        # Act
        response = await use_case.execute(
            CastVoteRequest(
                post_id=str(post.id),
                voter_id=str(voter.id),
                vote_type="agree",
                now=T0,
            )
        )

        # Assert
        assert response.vote_type == VoteType.AGREE
        assert response.vote_value == 1
        assert response.total_votes == 1
        assert response.weighted_score == 1
        assert response.hot_score == pytest.approx(1 / 2**1.8)
        assert response.consensus.agree == pytest.approx(100.0)
        assert response.voter_points == 1

        (row,) = await reputation.get_category_points(voter.id)
        assert row.category_id == category.id

    @pytest.mark.asyncio
    async def test_unknown_vote_type_is_rejected(self, unit_env):
        """Raw vote types are validated before anything is written."""
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        voter, _, post = await _seed(unit_env)

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                CastVoteRequest(
                    post_id=str(post.id), voter_id=str(voter.id), vote_type="upvote"
                )
            )

        assert (await post_repo.find_by_id(post.id)).total_votes == 0

    @pytest.mark.asyncio
    async def test_duplicate_vote_awards_nothing_more(self, unit_env):
        """A rejected duplicate earns no points."""
        use_case = await unit_env.get(CastVoteUseCase)
        reputation = await unit_env.get(ReputationService)
        voter, _, post = await _seed(unit_env)
        request = CastVoteRequest(
            post_id=str(post.id), voter_id=str(voter.id), vote_type="neutral"
        )
        await use_case.execute(request)

        with pytest.raises(ConflictError):
            await use_case.execute(request)

        user = await reputation.get_user(voter.id)
        assert user.total_points == 1


class TestGetUserVoteUseCase:
    """Tests for GetUserVoteUseCase."""

    @pytest.mark.asyncio
    async def test_reports_vote_state(self, unit_env):
        """The use case reports whether and how a user voted."""
        # Arrange
        cast = await unit_env.get(CastVoteUseCase)
        get_vote = await unit_env.get(GetUserVoteUseCase)
        voter, _, post = await _seed(unit_env)
        request = GetUserVoteRequest(post_id=str(post.id), user_id=str(voter.id))

        # Act
        before = await get_vote.execute(request)
        await cast.execute(
            CastVoteRequest(
                post_id=str(post.id),
                voter_id=str(voter.id),
                vote_type="strongly_disagree",
            )
        )
        after = await get_vote.execute(request)

        # Assert
        assert before.has_voted is False
        assert after.has_voted is True
        assert after.vote_type == VoteType.STRONGLY_DISAGREE

    @pytest.mark.asyncio
    async def test_other_user_has_not_voted(self, unit_env):
        """A vote by one user says nothing about another."""
        get_vote = await unit_env.get(GetUserVoteUseCase)
        _, _, post = await _seed(unit_env)

        response = await get_vote.execute(
            GetUserVoteRequest(post_id=str(post.id), user_id=str(uuid4()))
        )

        assert response.has_voted is False
