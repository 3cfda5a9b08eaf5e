"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional

from concensor.domain.error import NotFoundError
from concensor.domain.model.user import User
from concensor.domain.repository.user import UserRepository
from concensor.domain.value import CategoryId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_id_for_update(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID (no locking needed)."""
        return self._users.get(user_id)

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def update_totals(self, user_id: UserId, total_points: int) -> User:
        """Set total points and raise the peak if exceeded."""
        user = self._get(user_id)
        updated = user.model_copy(
            update={
                "total_points": total_points,
                "peak_points": max(user.peak_points, total_points),
            }
        )
        self._users[user_id] = updated
        return updated

    async def update_last_login(self, user_id: UserId, when: datetime) -> None:
        """Stamp the last login date."""
        user = self._get(user_id)
        self._users[user_id] = user.model_copy(update={"last_login_date": when})

    async def set_equipped_badge(
        self, user_id: UserId, category_id: Optional[CategoryId]
    ) -> User:
        """Set or clear the equipped badge category."""
        updated = self._get(user_id).model_copy(
            update={"equipped_badge_category_id": category_id}
        )
        self._users[user_id] = updated
        return updated

    def _get(self, user_id: UserId) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user
