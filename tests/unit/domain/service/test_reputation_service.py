"""Unit tests for ReputationService and the points helpers."""

import math
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from concensor.config import DecaySettings, PointsSettings
from concensor.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from concensor.domain.repository import (
    CategoryPointsRepository,
    CategoryRepository,
    UserRepository,
)
from concensor.domain.service import (
    ReputationService,
    badge_level_for_points,
    calculate_decayed_points,
    points_for_next_level,
)
from concensor.domain.service.reputation_service import (
    POINTS_FOR_COMMENT,
    POINTS_FOR_POST,
    POINTS_FOR_VOTE,
)
from concensor.domain.value import BadgeLevel, CategoryId, ReputationAction, UserId
from concensor.persistence.repository.inmemory import (
    InMemoryCategoryPointsRepository,
    InMemoryUserRepository,
)
from tests.conftest import T0, make_category, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

DECAY = DecaySettings()


async def _seed_user(env, username: str = "alice"):
    users = await env.get(UserRepository)
    return await users.save(make_user(username))


async def _seed_category(env, name: str = "Technology", parent_id=None):
    categories = await env.get(CategoryRepository)
    return categories.add(make_category(name, parent_id))


class ContendedCategoryPointsRepository(InMemoryCategoryPointsRepository):
    """Fails the first insert in one category as a concurrent writer would."""

    def __init__(self, contended: CategoryId, calls: list[str] | None = None):
        super().__init__()
        self.contended = contended
        self.calls = calls if calls is not None else []

    async def find_for_update(self, user_id, category_id):
        self.calls.append("lock category")
        return await super().find_for_update(user_id, category_id)

    async def find_by_user(self, user_id, for_update=False):
        if for_update:
            self.calls.append("lock category")
        return await super().find_by_user(user_id, for_update)

    async def save(self, row):
        existing = await self.find(row.user_id, row.category_id)
        if row.category_id == self.contended and existing is None:
            raise IntegrityError("Duplicate category points", None, Exception())
        return await super().save(row)


class LockRecordingUserRepository(InMemoryUserRepository):
    """Records when a user row lock is taken."""

    def __init__(self, calls: list[str]):
        super().__init__()
        self.calls = calls

    async def find_by_id_for_update(self, user_id):
        self.calls.append("lock user")
        return await super().find_by_id_for_update(user_id)


def _reputation_service(points_repo, users, categories) -> ReputationService:
    return ReputationService(
        points_repo, users, categories, PointsSettings(), DecaySettings()
    )


class TestBadgeLevels:
    """Tests for badge_level_for_points and points_for_next_level."""

    @pytest.mark.parametrize(
        "points,level",
        [
            (0, BadgeLevel.ROOKIE),
            (99, BadgeLevel.ROOKIE),
            (100, BadgeLevel.APPRENTICE),
            (499, BadgeLevel.APPRENTICE),
            (500, BadgeLevel.EXPERT),
            (1500, BadgeLevel.MASTER),
            (4999, BadgeLevel.MASTER),
            (5000, BadgeLevel.LEGEND),
            (250_000, BadgeLevel.LEGEND),
        ],
    )
    def test_thresholds(self, points, level):
        """Levels follow the 0/100/500/1500/5000 thresholds."""
        assert badge_level_for_points(points) == level

    def test_levels_are_monotone_with_rookie_floor(self):
        """More points never mean a lower level, and level 1 is the floor."""
        levels = [badge_level_for_points(p) for p in range(0, 6000, 50)]

        assert levels == sorted(levels)
        assert min(levels) == BadgeLevel.ROOKIE

    def test_custom_thresholds(self):
        """Thresholds can be configured."""
        thresholds = [0, 10, 20, 30, 40]

        assert badge_level_for_points(25, thresholds) == BadgeLevel.EXPERT

    def test_points_for_next_level(self):
        """The next threshold is reported until Legend."""
        assert points_for_next_level(BadgeLevel.ROOKIE) == 100
        assert points_for_next_level(BadgeLevel.MASTER) == 5000
        assert points_for_next_level(BadgeLevel.LEGEND) is None

    def test_badge_labels(self):
        """Badge names are derived from the level."""
        assert BadgeLevel.ROOKIE.label == "Rookie"
        assert BadgeLevel.LEGEND.label == "Legend"


class TestCalculateDecayedPoints:
    """Tests for calculate_decayed_points."""

    def test_thirty_days_inactive(self):
        """80 points after 30 days decay for 23 days to 50."""
        assert calculate_decayed_points(80, T0, T0 + timedelta(days=30), DECAY) == 50

    def test_within_grace_period(self):
        """No decay inside the grace period."""
        now = T0 + timedelta(days=6, hours=23)

        assert calculate_decayed_points(80, T0, now, DECAY) == 80

    def test_grace_boundary_is_zero_decay(self):
        """Exactly the grace period gives zero decay days."""
        assert calculate_decayed_points(80, T0, T0 + timedelta(days=7), DECAY) == 80

    def test_never_logged_in(self):
        """A missing login date never decays."""
        assert calculate_decayed_points(80, None, T0, DECAY) == 80

    def test_decay_days_are_capped(self):
        """Inactivity beyond the cap decays no further."""
        capped = calculate_decayed_points(1000, T0, T0 + timedelta(days=37), DECAY)
        longer = calculate_decayed_points(1000, T0, T0 + timedelta(days=400), DECAY)

        assert capped == longer
        assert capped == math.floor(1000 * (1 - DECAY.rate) ** 30)

    def test_floor_protection(self):
        """Balances at or above the floor never decay below it."""
        now = T0 + timedelta(days=37)

        assert calculate_decayed_points(12, T0, now, DECAY) == 10
        assert calculate_decayed_points(10, T0, now, DECAY) == 10

    def test_balances_below_floor_are_left_alone(self):
        """Balances already below the floor do not move."""
        now = T0 + timedelta(days=37)

        assert calculate_decayed_points(5, T0, now, DECAY) == 5
        assert calculate_decayed_points(0, T0, now, DECAY) == 0


class TestAwardPoints:
    """Tests for award_points and award_for_action."""

    @pytest.mark.asyncio
    async def test_first_award_creates_row(self, unit_env):
        """The first action in a category creates its row lazily."""
        # Arrange
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)

        # Act
        row = await reputation.award_for_action(
            user.id, category.id, ReputationAction.POST, now=T0
        )

        # Assert
        assert row.points == 5
        assert row.peak_points == 5
        assert row.current_badge_level == BadgeLevel.ROOKIE
        assert row.last_login_date == T0
        refreshed = await reputation.get_user(user.id)
        assert refreshed.total_points == 5
        assert refreshed.peak_points == 5

    @pytest.mark.asyncio
    async def test_action_amounts(self, unit_env):
        """Votes, posts and comments earn their configured points."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)

        for action in ReputationAction:
            await reputation.award_for_action(user.id, category.id, action)

        refreshed = await reputation.get_user(user.id)
        assert POINTS_FOR_VOTE == 1
        assert POINTS_FOR_POST == 5
        assert POINTS_FOR_COMMENT == 2
        assert refreshed.total_points == (
            POINTS_FOR_VOTE + POINTS_FOR_POST + POINTS_FOR_COMMENT
        )

    @pytest.mark.asyncio
    async def test_totals_span_categories(self, unit_env):
        """Total points are the sum over categories."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        science = await _seed_category(unit_env, "Science")
        sports = await _seed_category(unit_env, "Sports")

        await reputation.award_points(user.id, science.id, 10)
        await reputation.award_points(user.id, sports.id, 5)

        refreshed = await reputation.get_user(user.id)
        assert refreshed.total_points == 15

    @pytest.mark.asyncio
    async def test_balance_never_goes_negative(self, unit_env):
        """A large deduction clamps at zero and keeps the Rookie floor."""
        # Arrange
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)
        await reputation.award_points(user.id, category.id, 40)

        # Act
        row = await reputation.award_points(user.id, category.id, -1000)

        # Assert
        assert row.points == 0
        assert row.peak_points == 40
        assert row.current_badge_level == BadgeLevel.ROOKIE
        refreshed = await reputation.get_user(user.id)
        assert refreshed.total_points == 0
        assert refreshed.peak_points == 40

    @pytest.mark.asyncio
    async def test_peaks_never_fall(self, unit_env):
        """Losing points lowers the current level but not the peak."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)

        await reputation.award_points(user.id, category.id, 600)
        row = await reputation.award_points(user.id, category.id, -200)

        assert row.points == 400
        assert row.current_badge_level == BadgeLevel.APPRENTICE
        assert row.peak_points == 600
        assert row.peak_badge_level == BadgeLevel.EXPERT

    @pytest.mark.asyncio
    async def test_award_to_missing_user_raises_not_found(self, unit_env):
        """Points can only be awarded to existing users."""
        reputation = await unit_env.get(ReputationService)
        points_repo = await unit_env.get(CategoryPointsRepository)
        category = await _seed_category(unit_env)
        user_id = UserId(uuid4())

        with pytest.raises(NotFoundError):
            await reputation.award_points(user_id, category.id, 5)

        assert await points_repo.find_by_user(user_id) == []

    @pytest.mark.asyncio
    async def test_concurrent_first_insert_is_retryable_conflict(self, unit_env):
        """Losing the race to create a category row is a retryable conflict."""
        # Arrange
        users = await unit_env.get(UserRepository)
        categories = await unit_env.get(CategoryRepository)
        user = await _seed_user(unit_env)
        science = await _seed_category(unit_env, "Science")
        sports = await _seed_category(unit_env, "Sports")
        points_repo = ContendedCategoryPointsRepository(contended=sports.id)
        reputation = _reputation_service(points_repo, users, categories)
        await reputation.award_points(user.id, science.id, 5)

        # Act & Assert
        with pytest.raises(ConflictError) as exc_info:
            await reputation.award_points(user.id, sports.id, 5)

        assert exc_info.value.retryable is True
        assert await points_repo.find(user.id, sports.id) is None
        unchanged = await reputation.get_user(user.id)
        assert unchanged.total_points == 5

    @pytest.mark.asyncio
    async def test_award_locks_user_before_category(self, unit_env):
        """The user row is locked ahead of the category row."""
        # Arrange
        calls: list[str] = []
        users = LockRecordingUserRepository(calls)
        categories = await unit_env.get(CategoryRepository)
        user = await users.save(make_user("alice"))
        category = await _seed_category(unit_env)
        points_repo = ContendedCategoryPointsRepository(CategoryId(uuid4()), calls)
        reputation = _reputation_service(points_repo, users, categories)

        # Act
        await reputation.award_points(user.id, category.id, 5)

        # Assert
        assert calls == ["lock user", "lock category"]


class TestLoginDecay:
    """Tests for apply_login_decay."""

    @pytest.mark.asyncio
    async def test_decay_after_inactivity(self, unit_env):
        """Thirty days away shrinks 80 points to 50, keeping the peak."""
        # Arrange
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)
        await reputation.award_points(user.id, category.id, 80, now=T0)
        login = T0 + timedelta(days=30)

        # Act
        await reputation.apply_login_decay(user.id, now=login)

        # Assert
        (row,) = await reputation.get_category_points(user.id)
        assert row.points == 50
        assert row.peak_points == 80
        assert row.last_login_date == login
        refreshed = await reputation.get_user(user.id)
        assert refreshed.total_points == 50
        assert refreshed.peak_points == 80
        assert refreshed.last_login_date == login

    @pytest.mark.asyncio
    async def test_decay_is_idempotent_at_same_instant(self, unit_env):
        """A second decay at the same instant changes nothing."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)
        await reputation.award_points(user.id, category.id, 80, now=T0)
        login = T0 + timedelta(days=30)

        await reputation.apply_login_decay(user.id, now=login)
        await reputation.apply_login_decay(user.id, now=login)

        (row,) = await reputation.get_category_points(user.id)
        assert row.points == 50

    @pytest.mark.asyncio
    async def test_decay_lowers_current_level_only(self, unit_env):
        """Decay can drop the current badge while the peak badge stays."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)
        await reputation.award_points(user.id, category.id, 1500, now=T0)

        await reputation.apply_login_decay(user.id, now=T0 + timedelta(days=30))

        (row,) = await reputation.get_category_points(user.id)
        assert row.points == math.floor(1500 * (1 - DECAY.rate) ** 23)
        assert row.current_badge_level == BadgeLevel.EXPERT
        assert row.peak_badge_level == BadgeLevel.MASTER

    @pytest.mark.asyncio
    async def test_login_within_grace_only_stamps_date(self, unit_env):
        """A recent login leaves points alone but restarts the clock."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)
        await reputation.award_points(user.id, category.id, 80, now=T0)
        login = T0 + timedelta(days=3)

        await reputation.apply_login_decay(user.id, now=login)

        (row,) = await reputation.get_category_points(user.id)
        assert row.points == 80
        assert row.last_login_date == login

    @pytest.mark.asyncio
    async def test_decay_for_missing_user_raises_not_found(self, unit_env):
        """Decay requires an existing user."""
        reputation = await unit_env.get(ReputationService)

        with pytest.raises(NotFoundError):
            await reputation.apply_login_decay(UserId(uuid4()), now=T0)

    @pytest.mark.asyncio
    async def test_decay_locks_user_before_categories(self, unit_env):
        """Decay takes the user row lock before locking category rows."""
        calls: list[str] = []
        users = LockRecordingUserRepository(calls)
        categories = await unit_env.get(CategoryRepository)
        user = await users.save(make_user("alice"))
        category = await _seed_category(unit_env)
        points_repo = ContendedCategoryPointsRepository(CategoryId(uuid4()), calls)
        reputation = _reputation_service(points_repo, users, categories)
        await reputation.award_points(user.id, category.id, 80, now=T0)
        calls.clear()

        await reputation.apply_login_decay(user.id, now=T0 + timedelta(days=30))

        assert calls == ["lock user", "lock category"]


class TestRookieBadges:
    """Tests for initialize_rookie_badges."""

    @pytest.mark.asyncio
    async def test_rookie_row_in_every_main_category(self, unit_env):
        """Sign-up creates Rookie rows in main categories only, once."""
        # Arrange
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        science = await _seed_category(unit_env, "Science")
        politics = await _seed_category(unit_env, "Politics")
        await _seed_category(unit_env, "Physics", parent_id=science.id)

        # Act
        created = await reputation.initialize_rookie_badges(user.id)
        again = await reputation.initialize_rookie_badges(user.id)

        # Assert
        assert {row.category_id for row in created} == {science.id, politics.id}
        assert all(row.points == 0 for row in created)
        assert all(row.current_badge_level == BadgeLevel.ROOKIE for row in created)
        assert again == []

    @pytest.mark.asyncio
    async def test_existing_rows_are_kept(self, unit_env):
        """Initialization never resets earned points."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        science = await _seed_category(unit_env, "Science")
        politics = await _seed_category(unit_env, "Politics")
        await reputation.award_points(user.id, science.id, 120)

        created = await reputation.initialize_rookie_badges(user.id)

        assert [row.category_id for row in created] == [politics.id]
        rows = {r.category_id: r for r in await reputation.get_category_points(user.id)}
        assert rows[science.id].points == 120

    @pytest.mark.asyncio
    async def test_rookie_rows_are_stamped_at_given_instant(self, unit_env):
        """Created rows start their decay clock at the sign-up instant."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        await _seed_category(unit_env, "Science")
        await _seed_category(unit_env, "Politics")

        created = await reputation.initialize_rookie_badges(user.id, now=T0)

        assert len(created) == 2
        assert all(row.last_login_date == T0 for row in created)


class TestEquippedBadge:
    """Tests for toggle_equipped_badge and require_main_category."""

    @pytest.mark.asyncio
    async def test_toggle_equips_then_unequips(self, unit_env):
        """Equipping the equipped badge clears it."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)

        equipped = await reputation.toggle_equipped_badge(user.id, category.id)
        cleared = await reputation.toggle_equipped_badge(user.id, category.id)

        assert equipped.equipped_badge_category_id == category.id
        assert cleared.equipped_badge_category_id is None

    @pytest.mark.asyncio
    async def test_equip_switches_category(self, unit_env):
        """Equipping another category replaces the current badge."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        science = await _seed_category(unit_env, "Science")
        sports = await _seed_category(unit_env, "Sports")

        await reputation.toggle_equipped_badge(user.id, science.id)
        switched = await reputation.toggle_equipped_badge(user.id, sports.id)

        assert switched.equipped_badge_category_id == sports.id

    @pytest.mark.asyncio
    async def test_equip_creates_rookie_row(self, unit_env):
        """A user can show a Rookie badge in a category without activity."""
        reputation = await unit_env.get(ReputationService)
        points_repo = await unit_env.get(CategoryPointsRepository)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env)

        await reputation.toggle_equipped_badge(user.id, category.id, now=T0)

        row = await points_repo.find(user.id, category.id)
        assert row is not None
        assert row.current_badge_level == BadgeLevel.ROOKIE
        assert row.last_login_date == T0

    @pytest.mark.asyncio
    async def test_equipped_badge_reports_current_level(self, unit_env):
        """The shown badge follows the current level, not the peak."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env, "Science")
        await reputation.award_points(user.id, category.id, 600)
        await reputation.award_points(user.id, category.id, -200)
        await reputation.toggle_equipped_badge(user.id, category.id)

        badge = await reputation.get_equipped_badge(user.id)

        assert badge is not None
        assert badge.level == BadgeLevel.APPRENTICE
        assert badge.label == "Science-Apprentice"

    @pytest.mark.asyncio
    async def test_equipped_badge_without_row_is_rookie(self, unit_env):
        """A missing category row shows as a Rookie badge."""
        reputation = await unit_env.get(ReputationService)
        users = await unit_env.get(UserRepository)
        user = await _seed_user(unit_env)
        category = await _seed_category(unit_env, "Science")
        await users.set_equipped_badge(user.id, category.id)

        badge = await reputation.get_equipped_badge(user.id)

        assert badge is not None
        assert badge.level == BadgeLevel.ROOKIE
        assert badge.label == "Science-Rookie"

    @pytest.mark.asyncio
    async def test_no_equipped_badge(self, unit_env):
        """Users without an equipped badge show none."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)

        assert await reputation.get_equipped_badge(user.id) is None

    @pytest.mark.asyncio
    async def test_sub_category_is_rejected(self, unit_env):
        """Badges exist only for main categories."""
        reputation = await unit_env.get(ReputationService)
        user = await _seed_user(unit_env)
        science = await _seed_category(unit_env, "Science")
        physics = await _seed_category(unit_env, "Physics", parent_id=science.id)

        with pytest.raises(InvalidArgumentError, match="not a main category"):
            await reputation.toggle_equipped_badge(user.id, physics.id)

    @pytest.mark.asyncio
    async def test_unknown_category_raises_not_found(self, unit_env):
        """Unknown categories are not found."""
        reputation = await unit_env.get(ReputationService)

        with pytest.raises(NotFoundError):
            await reputation.require_main_category(CategoryId(uuid4()))
