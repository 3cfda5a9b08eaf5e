"""Unit tests for CreateCommentUseCase and GetCommentsUseCase."""

from datetime import timedelta

import pytest

from concensor.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from concensor.domain.repository import (
    CategoryRepository,
    PostRepository,
    UserRepository,
)
from concensor.domain.service import ReputationService, VoteService
from concensor.domain.value import VoteType
from tests.conftest import T0, make_category, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(env):
    users = await env.get(UserRepository)
    categories = await env.get(CategoryRepository)
    posts = await env.get(PostRepository)

    author = await users.save(make_user("author"))
    commenter = await users.save(make_user("commenter"))
    category = categories.add(make_category("Culture"))
    post = await posts.save(make_post(author.id, category.id))
    return commenter, post


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_comment_updates_post_and_awards_points(self, unit_env):
        """Commenting refreshes the post and earns comment points."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        reputation = await unit_env.get(ReputationService)
        commenter, post = await _seed(unit_env)

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                author_id=str(commenter.id),
                text="Strong take.",
                now=T0,
            )
        )

        # Assert
        assert response.parent_id is None
        assert response.comment_count == 1
        assert response.hot_score == pytest.approx(2 / 2**1.8)
        user = await reputation.get_user(commenter.id)
        assert user.total_points == 2


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_comments_are_numbered_in_thread_order(self, unit_env):
        """Comments come back depth first with display labels."""
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)
        commenter, post = await _seed(unit_env)

        async def comment(text, minutes, parent=None):
            return await create.execute(
                CreateCommentRequest(
                    post_id=str(post.id),
                    author_id=str(commenter.id),
                    text=text,
                    parent_id=parent.comment_id if parent else None,
                    now=T0 + timedelta(minutes=minutes),
                )
            )

        b1 = await comment("first", 0)
        b2 = await comment("second", 1)
        b1_1 = await comment("reply", 2, parent=b1)
        await comment("reply to reply", 3, parent=b1_1)
        await comment("reply to second", 4, parent=b2)

        # Act
        response = await get_comments.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        assert response.total == 5
        labels = [
            (c.text, c.display_number, c.reply_to_number) for c in response.comments
        ]
        assert labels == [
            ("first", "B1", None),
            ("reply", "B1-1", None),
            ("reply to reply", "B1-2", "B1-1"),
            ("second", "B2", None),
            ("reply to second", "B2-1", None),
        ]

    @pytest.mark.asyncio
    async def test_comments_show_author_vote_and_badge(self, unit_env):
        """Each comment carries its author's sentiment and equipped badge."""
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)
        votes = await unit_env.get(VoteService)
        reputation = await unit_env.get(ReputationService)
        commenter, post = await _seed(unit_env)
        await votes.cast_vote(post.id, commenter.id, VoteType.AGREE, now=T0)
        await reputation.award_points(commenter.id, post.category_id, 150, now=T0)
        await reputation.toggle_equipped_badge(commenter.id, post.category_id)
        await create.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                author_id=str(commenter.id),
                text="Agreed, with caveats.",
                now=T0,
            )
        )

        # Act
        response = await get_comments.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        (item,) = response.comments
        assert item.author_vote == VoteType.AGREE
        assert item.equipped_badge is not None
        assert item.equipped_badge.category_id == str(post.category_id)
        assert item.equipped_badge.badge_level == 2
        assert item.equipped_badge.badge_name == "Apprentice"
        assert item.equipped_badge.label == "Culture-Apprentice"

    @pytest.mark.asyncio
    async def test_author_without_vote_or_badge(self, unit_env):
        """Authors who neither voted nor equipped a badge show neither."""
        create = await unit_env.get(CreateCommentUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)
        commenter, post = await _seed(unit_env)
        await create.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                author_id=str(commenter.id),
                text="Just reading.",
                now=T0,
            )
        )

        response = await get_comments.execute(GetCommentsRequest(post_id=str(post.id)))

        (item,) = response.comments
        assert item.author_vote is None
        assert item.equipped_badge is None
