"""PostgreSQL implementation of Category repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from concensor.domain.model import Category
from concensor.domain.repository import CategoryRepository
from concensor.domain.value import CategoryId
from concensor.persistence.mappers import row_to_category
from concensor.persistence.tables import categories_table


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        stmt = select(categories_table).where(categories_table.c.id == category_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_main(self) -> List[Category]:
        """Find all main categories ordered by name."""
        stmt = (
            select(categories_table)
            .where(categories_table.c.parent_id.is_(None))
            .order_by(categories_table.c.name)
        )
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]
