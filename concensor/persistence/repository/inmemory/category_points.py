"""In-memory category points repository for testing."""

from typing import Optional

from concensor.domain.model.category_points import UserCategoryPoints
from concensor.domain.repository.category_points import CategoryPointsRepository
from concensor.domain.value import CategoryId, UserId


class InMemoryCategoryPointsRepository(CategoryPointsRepository):
    """In-memory implementation of CategoryPointsRepository for testing."""

    def __init__(self) -> None:
        self._rows: dict[tuple[UserId, CategoryId], UserCategoryPoints] = {}

    async def find(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[UserCategoryPoints]:
        """Find the row for a (user, category) pair."""
        return self._rows.get((user_id, category_id))

    async def find_for_update(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[UserCategoryPoints]:
        """Find the row for a (user, category) pair (no locking needed)."""
        return self._rows.get((user_id, category_id))

    async def find_by_user(
        self, user_id: UserId, for_update: bool = False
    ) -> list[UserCategoryPoints]:
        """Find a user's rows, highest points first."""
        rows = [r for (uid, _), r in self._rows.items() if uid == user_id]
        rows.sort(key=lambda r: (-r.points, str(r.category_id)))
        return rows

    async def save(self, row: UserCategoryPoints) -> UserCategoryPoints:
        """Insert or update a row, keeping the original row ID on update."""
        key = (row.user_id, row.category_id)
        existing = self._rows.get(key)
        if existing and existing.id != row.id:
            row = row.model_copy(update={"id": existing.id})
        self._rows[key] = row
        return row

    async def sum_points(self, user_id: UserId) -> int:
        """Sum a user's points across categories."""
        return sum(r.points for (uid, _), r in self._rows.items() if uid == user_id)
