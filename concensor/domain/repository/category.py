"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from concensor.domain.model.category import Category
from concensor.domain.value import CategoryId


class CategoryRepository(ABC):
    """Read-only repository for categories."""

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID.

        Args:
            category_id: The category's unique identifier

        Returns:
            The category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_main(self) -> List[Category]:
        """Find all main (top-level) categories.

        Returns:
            Main categories ordered by name
        """
        pass
