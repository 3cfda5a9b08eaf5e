"""PostgreSQL implementation of CategoryPoints repository."""

from typing import List, Optional

from sqlalchemy import and_, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from concensor.domain.model import UserCategoryPoints
from concensor.domain.repository import CategoryPointsRepository
from concensor.domain.value import CategoryId, UserId
from concensor.persistence.mappers import (
    category_points_to_dict,
    row_to_category_points,
)
from concensor.persistence.tables import user_category_points_table

_table = user_category_points_table


class PostgresCategoryPointsRepository(CategoryPointsRepository):
    """PostgreSQL implementation of CategoryPointsRepository.

    Rows are identified by the (user_id, category_id) pair; ``save`` inserts
    when the pair is new and updates in place otherwise.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _select_pair(self, user_id: UserId, category_id: CategoryId):
        return select(_table).where(
            and_(_table.c.user_id == user_id, _table.c.category_id == category_id)
        )

    async def find(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[UserCategoryPoints]:
        """Find the row for a (user, category) pair."""
        result = await self.session.execute(self._select_pair(user_id, category_id))
        row = result.fetchone()
        return row_to_category_points(row._asdict()) if row else None

    async def find_for_update(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[UserCategoryPoints]:
        """Find and lock the row for a (user, category) pair."""
        stmt = self._select_pair(user_id, category_id).with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category_points(row._asdict()) if row else None

    async def find_by_user(
        self, user_id: UserId, for_update: bool = False
    ) -> List[UserCategoryPoints]:
        """Find all rows of a user, highest points first."""
        stmt = (
            select(_table)
            .where(_table.c.user_id == user_id)
            .order_by(desc(_table.c.points), _table.c.category_id)
        )
        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return [row_to_category_points(row._asdict()) for row in result.fetchall()]

    async def save(self, row: UserCategoryPoints) -> UserCategoryPoints:
        """Insert or update a row.

        A plain INSERT is used for new pairs so a concurrent insert of the same
        pair surfaces as an IntegrityError from the unique constraint.
        """
        existing = await self.find(row.user_id, row.category_id)
        row_dict = category_points_to_dict(row)

        if existing:
            row_dict.pop("id")
            stmt = (
                update(_table)
                .where(_table.c.id == existing.id)
                .values(**row_dict)
                .returning(_table)
            )
        else:
            stmt = insert(_table).values(**row_dict).returning(_table)

        result = await self.session.execute(stmt)
        saved = result.fetchone()
        await self.session.flush()
        return row_to_category_points(saved._asdict())  # type: ignore[union-attr]

    async def sum_points(self, user_id: UserId) -> int:
        """Sum a user's points across categories."""
        stmt = select(func.coalesce(func.sum(_table.c.points), 0)).where(
            _table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)
