"""Category points repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from concensor.domain.model.category_points import UserCategoryPoints
from concensor.domain.value import CategoryId, UserId


class CategoryPointsRepository(ABC):
    """Repository for per-category user reputation rows."""

    @abstractmethod
    async def find(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[UserCategoryPoints]:
        """Find the row for a (user, category) pair.

        Args:
            user_id: The user ID
            category_id: The main category ID

        Returns:
            The row if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_for_update(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[UserCategoryPoints]:
        """Find the row for a (user, category) pair and lock it.

        Args:
            user_id: The user ID
            category_id: The main category ID

        Returns:
            The row if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(
        self, user_id: UserId, for_update: bool = False
    ) -> List[UserCategoryPoints]:
        """Find all category rows of a user.

        Args:
            user_id: The user ID
            for_update: Lock the returned rows until the transaction ends

        Returns:
            The user's rows ordered by points, highest first
        """
        pass

    @abstractmethod
    async def save(self, row: UserCategoryPoints) -> UserCategoryPoints:
        """Insert or update a row.

        Args:
            row: The row to save

        Returns:
            The saved row

        Raises:
            IntegrityError: If a concurrent writer inserted the same pair first
        """
        pass

    @abstractmethod
    async def sum_points(self, user_id: UserId) -> int:
        """Sum a user's points across all categories.

        Args:
            user_id: The user ID

        Returns:
            Total points (0 if the user has no rows)
        """
        pass
