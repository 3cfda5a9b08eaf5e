"""In-memory category repository for testing."""

from typing import Optional

from concensor.domain.model.category import Category
from concensor.domain.repository.category import CategoryRepository
from concensor.domain.value import CategoryId


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing.

    Categories are read-only for the engine; tests seed them with ``add``.
    """

    def __init__(self) -> None:
        self._categories: dict[CategoryId, Category] = {}

    def add(self, category: Category) -> Category:
        """Seed a category."""
        self._categories[category.id] = category
        return category

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        return self._categories.get(category_id)

    async def find_main(self) -> list[Category]:
        """Find main categories ordered by name."""
        return sorted(
            (c for c in self._categories.values() if c.is_main),
            key=lambda c: c.name,
        )
