"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from concensor.domain.model.user import User
from concensor.domain.value import CategoryId, UserId


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID and lock the row until the transaction ends.

        Writers that change a user's category points take this lock before
        any category row, so totals for one user are recomputed serially.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def update_totals(self, user_id: UserId, total_points: int) -> User:
        """Set a user's total points and raise the peak if exceeded.

        ``peak_points`` becomes ``max(peak_points, total_points)``; it never
        decreases.

        Args:
            user_id: The user ID
            total_points: Sum of the user's category points

        Returns:
            The updated user
        """
        pass

    @abstractmethod
    async def update_last_login(self, user_id: UserId, when: datetime) -> None:
        """Stamp the user's last login date.

        Args:
            user_id: The user ID
            when: Login instant
        """
        pass

    @abstractmethod
    async def set_equipped_badge(
        self, user_id: UserId, category_id: Optional[CategoryId]
    ) -> User:
        """Set or clear the category whose badge the user displays.

        Args:
            user_id: The user ID
            category_id: Main category ID, or None to unequip

        Returns:
            The updated user
        """
        pass
