"""Reputation domain service.

Users earn points per main category for voting, posting and commenting.
Points map to a badge level through fixed thresholds, and inactivity
shrinks points when the user next logs in. Peak points and peak badge level
are a permanent high-water mark that decay never lowers.
"""

import math
from collections.abc import Sequence
from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from concensor.config import DecaySettings, PointsSettings
from concensor.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from concensor.domain.model.category import Category
from concensor.domain.model.category_points import UserCategoryPoints
from concensor.domain.model.user import User
from concensor.domain.repository import (
    CategoryPointsRepository,
    CategoryRepository,
    UserRepository,
)
from concensor.domain.value import (
    BadgeLevel,
    CategoryId,
    CategoryPointsId,
    EquippedBadge,
    ReputationAction,
    UserId,
)
from concensor.util.time import utcnow

from .base import Service

POINTS_FOR_VOTE = PointsSettings().vote
POINTS_FOR_POST = PointsSettings().post
POINTS_FOR_COMMENT = PointsSettings().comment

DEFAULT_BADGE_THRESHOLDS: tuple[int, ...] = tuple(PointsSettings().badge_thresholds)

SECONDS_PER_DAY = 24 * 60 * 60


def badge_level_for_points(
    points: int, thresholds: Sequence[int] = DEFAULT_BADGE_THRESHOLDS
) -> BadgeLevel:
    """Badge level held at a point balance.

    Every balance, including one below the lowest threshold, holds at least
    the Rookie badge.

    Args:
        points: Point balance in a category
        thresholds: Ascending minimum points for levels 1..5

    Returns:
        Badge level 1..5
    """
    level = BadgeLevel.ROOKIE
    for candidate, minimum in zip(BadgeLevel, thresholds):
        if points >= minimum:
            level = candidate
    return level


def points_for_next_level(
    level: BadgeLevel, thresholds: Sequence[int] = DEFAULT_BADGE_THRESHOLDS
) -> int | None:
    """Points required to reach the level above ``level``.

    Returns:
        Threshold of the next level, or None at the top level
    """
    if level == BadgeLevel.LEGEND:
        return None
    return thresholds[level]


def calculate_decayed_points(
    points: int,
    last_login_date: datetime | None,
    now: datetime,
    settings: DecaySettings,
) -> int:
    """Point balance after inactivity decay.

    Args:
        points: Balance before decay
        last_login_date: Previous login (None means never decay)
        now: Current login instant
        settings: Decay tuning

    Returns:
        Balance after decay; unchanged within the grace period
    """
    if last_login_date is None:
        return points

    days_since_login = math.floor(
        (now - last_login_date).total_seconds() / SECONDS_PER_DAY
    )
    if days_since_login < settings.grace_days:
        return points

    decay_days = min(days_since_login - settings.grace_days, settings.max_decay_days)
    decayed = math.floor(points * (1 - settings.rate) ** decay_days)

    if points < settings.min_points:
        # Balances already under the floor are left alone
        return points
    if decayed < settings.min_points:
        return settings.min_points
    return decayed


class ReputationService(Service):
    """Domain service for per-category points and badges.

    Writes must run inside the caller's transaction.
    """

    def __init__(
        self,
        category_points_repository: CategoryPointsRepository,
        user_repository: UserRepository,
        category_repository: CategoryRepository,
        points_settings: PointsSettings,
        decay_settings: DecaySettings,
    ) -> None:
        """Initialize reputation service.

        Args:
            category_points_repository: Per-category points repository
            user_repository: User repository
            category_repository: Category repository
            points_settings: Award amounts and badge thresholds
            decay_settings: Inactivity decay tuning
        """
        self.category_points_repository = category_points_repository
        self.user_repository = user_repository
        self.category_repository = category_repository
        self.points_settings = points_settings
        self.decay_settings = decay_settings

    def badge_level(self, points: int) -> BadgeLevel:
        """Badge level for a balance under the configured thresholds."""
        return badge_level_for_points(points, self.points_settings.badge_thresholds)

    def next_level_points(self, level: BadgeLevel) -> int | None:
        """Points needed for the level above under the configured thresholds."""
        return points_for_next_level(level, self.points_settings.badge_thresholds)

    def amount_for(self, action: ReputationAction) -> int:
        """Configured award for an action."""
        return {
            ReputationAction.VOTE: self.points_settings.vote,
            ReputationAction.POST: self.points_settings.post,
            ReputationAction.COMMENT: self.points_settings.comment,
        }[action]

    async def award_points(
        self,
        user_id: UserId,
        category_id: CategoryId,
        amount: int,
        now: datetime | None = None,
    ) -> UserCategoryPoints:
        """Add (or remove) points in a category and refresh the user's totals.

        The balance never goes below 0 and the badge level never below
        Rookie. Peaks only rise. The user row is locked before the category
        row, so concurrent awards in different categories cannot overwrite
        each other's total.

        Args:
            user_id: User ID
            category_id: Main category ID
            amount: Points to add; may be negative
            now: Stamped as the login date of a newly created row

        Returns:
            The updated category row

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If a concurrent writer created the row first (retryable)
        """
        with logfire.span(
            "reputation_service.award_points",
            user_id=str(user_id),
            category_id=str(category_id),
            amount=amount,
        ):
            await self._lock_user(user_id)
            existing = await self.category_points_repository.find_for_update(
                user_id, category_id
            )

            current = existing.points if existing else 0
            new_points = max(0, current + amount)
            new_level = self.badge_level(new_points)

            if existing:
                row = existing.model_copy(
                    update={
                        "points": new_points,
                        "peak_points": max(existing.peak_points, new_points),
                        "current_badge_level": new_level,
                        "peak_badge_level": max(existing.peak_badge_level, new_level),
                    }
                )
            else:
                row = UserCategoryPoints(
                    id=CategoryPointsId(uuid4()),
                    user_id=user_id,
                    category_id=category_id,
                    points=new_points,
                    peak_points=new_points,
                    current_badge_level=new_level,
                    peak_badge_level=new_level,
                    last_login_date=now or utcnow(),
                )

            try:
                saved = await self.category_points_repository.save(row)
            except IntegrityError:
                logfire.warn(
                    "Concurrent category points insert",
                    user_id=str(user_id),
                    category_id=str(category_id),
                )
                raise ConflictError(
                    "Category points were modified concurrently", retryable=True
                ) from None

            await self.refresh_totals(user_id)

            logfire.info(
                "Points awarded",
                user_id=str(user_id),
                category_id=str(category_id),
                points=saved.points,
                badge_level=int(saved.current_badge_level),
            )
            return saved

    async def award_for_action(
        self,
        user_id: UserId,
        category_id: CategoryId,
        action: ReputationAction,
        now: datetime | None = None,
    ) -> UserCategoryPoints:
        """Award the configured points for a qualifying action.

        Args:
            user_id: User ID
            category_id: Main category of the post acted on
            action: The qualifying action
            now: Action instant

        Returns:
            The updated category row
        """
        return await self.award_points(
            user_id, category_id, self.amount_for(action), now
        )

    async def refresh_totals(self, user_id: UserId) -> User:
        """Recompute a user's total points from their category rows.

        Callers that changed points hold the user row lock.

        Args:
            user_id: User ID

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
        """
        total = await self.category_points_repository.sum_points(user_id)
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logfire.warn("User not found for totals", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return await self.user_repository.update_totals(user_id, total)

    async def apply_login_decay(
        self, user_id: UserId, now: datetime | None = None
    ) -> None:
        """Apply inactivity decay to every category of a user at login.

        Each category's ``last_login_date`` is stamped to ``now`` whether or
        not decay fired, so a second call at the same instant changes
        nothing. Call at most once per login: every call restarts the decay
        clock.

        Args:
            user_id: User ID
            now: Login instant (defaults to current time)

        Raises:
            NotFoundError: If the user does not exist
        """
        with logfire.span("reputation_service.apply_login_decay", user_id=str(user_id)):
            at = now or utcnow()
            await self._lock_user(user_id)

            rows = await self.category_points_repository.find_by_user(
                user_id, for_update=True
            )

            decayed_count = 0
            for row in rows:
                new_points = calculate_decayed_points(
                    row.points, row.last_login_date, at, self.decay_settings
                )
                update: dict = {"last_login_date": at}
                if new_points != row.points:
                    decayed_count += 1
                    update["points"] = new_points
                    update["current_badge_level"] = self.badge_level(new_points)
                await self.category_points_repository.save(
                    row.model_copy(update=update)
                )

            await self.refresh_totals(user_id)
            await self.user_repository.update_last_login(user_id, at)

            logfire.info(
                "Login decay applied",
                user_id=str(user_id),
                categories=len(rows),
                decayed=decayed_count,
            )

    async def get_category_points(self, user_id: UserId) -> list[UserCategoryPoints]:
        """Get a user's category rows, highest points first."""
        with logfire.span(
            "reputation_service.get_category_points", user_id=str(user_id)
        ):
            return await self.category_points_repository.find_by_user(user_id)

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user

    async def get_equipped_badge(self, user_id: UserId) -> EquippedBadge | None:
        """Get the badge a user displays, at its current level.

        A user without a row in the equipped category shows a Rookie badge.

        Args:
            user_id: User ID

        Returns:
            The equipped badge, or None if the user shows none
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None or user.equipped_badge_category_id is None:
            return None

        category = await self.category_repository.find_by_id(
            user.equipped_badge_category_id
        )
        if category is None:
            return None

        row = await self.category_points_repository.find(user_id, category.id)
        return EquippedBadge(
            category_id=category.id,
            category_name=category.name,
            level=row.current_badge_level if row else BadgeLevel.ROOKIE,
        )

    async def require_main_category(self, category_id: CategoryId) -> Category:
        """Load a category that must be a main category.

        Args:
            category_id: Category ID

        Returns:
            The category

        Raises:
            NotFoundError: If the category does not exist
            InvalidArgumentError: If the category is a sub-category
        """
        category = await self.category_repository.find_by_id(category_id)
        if category is None:
            logfire.warn("Category not found", category_id=str(category_id))
            raise NotFoundError("Category", str(category_id))
        if not category.is_main:
            logfire.warn("Not a main category", category_id=str(category_id))
            raise InvalidArgumentError(
                f"Category {category_id} is not a main category"
            )
        return category

    async def initialize_rookie_badges(
        self, user_id: UserId, now: datetime | None = None
    ) -> list[UserCategoryPoints]:
        """Create a Rookie row in every main category the user lacks one in.

        Safe to call more than once.

        Args:
            user_id: Newly registered user ID
            now: Stamped as the login date of each created row

        Returns:
            The rows created by this call
        """
        with logfire.span(
            "reputation_service.initialize_rookie_badges", user_id=str(user_id)
        ):
            await self.get_user(user_id)
            at = now or utcnow()
            created: list[UserCategoryPoints] = []
            for category in await self.category_repository.find_main():
                if await self.category_points_repository.find(user_id, category.id):
                    continue
                created.append(
                    await self.category_points_repository.save(
                        self._rookie_row(user_id, category.id, at)
                    )
                )
            logfire.info(
                "Rookie badges initialized", user_id=str(user_id), count=len(created)
            )
            return created

    async def toggle_equipped_badge(
        self,
        user_id: UserId,
        category_id: CategoryId,
        now: datetime | None = None,
    ) -> User:
        """Equip a category's badge, or unequip it if already equipped.

        A Rookie row is created if the user has none in the category yet.

        Args:
            user_id: User ID
            category_id: Main category ID
            now: Stamped as the login date of a lazily created row

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user or category does not exist
            InvalidArgumentError: If the category is not a main category
        """
        with logfire.span(
            "reputation_service.toggle_equipped_badge",
            user_id=str(user_id),
            category_id=str(category_id),
        ):
            user = await self.get_user(user_id)
            await self.require_main_category(category_id)

            row = await self.category_points_repository.find(user_id, category_id)
            if row is None:
                await self.category_points_repository.save(
                    self._rookie_row(user_id, category_id, now or utcnow())
                )

            equip = user.equipped_badge_category_id != category_id
            updated = await self.user_repository.set_equipped_badge(
                user_id, category_id if equip else None
            )
            logfire.info(
                "Badge equipped" if equip else "Badge unequipped",
                user_id=str(user_id),
                category_id=str(category_id),
            )
            return updated

    async def _lock_user(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id_for_update(user_id)
        if user is None:
            logfire.warn("User not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user

    @staticmethod
    def _rookie_row(
        user_id: UserId, category_id: CategoryId, at: datetime
    ) -> UserCategoryPoints:
        return UserCategoryPoints(
            id=CategoryPointsId(uuid4()),
            user_id=user_id,
            category_id=category_id,
            last_login_date=at,
        )
