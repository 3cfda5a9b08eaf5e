"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from concensor.domain.error import NotFoundError
from concensor.domain.model import User
from concensor.domain.repository import UserRepository
from concensor.domain.value import CategoryId, UserId
from concensor.persistence.mappers import row_to_user, user_to_dict
from concensor.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id_for_update(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID and take a row lock (SELECT ... FOR UPDATE)."""
        stmt = (
            select(users_table).where(users_table.c.id == user_id).with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)
        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def update_totals(self, user_id: UserId, total_points: int) -> User:
        """Set total points and raise the peak in one statement.

        Args:
            user_id: User ID to update
            total_points: New total

        Returns:
            Updated user
        """
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(
                total_points=total_points,
                peak_points=func.greatest(users_table.c.peak_points, total_points),
            )
            .returning(users_table)
        )
        return await self._execute_returning(stmt, user_id)

    async def update_last_login(self, user_id: UserId, when: datetime) -> None:
        """Stamp the user's last login date.

        Args:
            user_id: User ID to update
            when: Login instant
        """
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(last_login_date=when)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_equipped_badge(
        self, user_id: UserId, category_id: Optional[CategoryId]
    ) -> User:
        """Set or clear the equipped badge category.

        Args:
            user_id: User ID to update
            category_id: Main category ID, or None to unequip

        Returns:
            Updated user
        """
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(equipped_badge_category_id=category_id)
            .returning(users_table)
        )
        return await self._execute_returning(stmt, user_id)

    async def _execute_returning(self, stmt, user_id: UserId) -> User:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            raise NotFoundError("User", str(user_id))
        await self.session.flush()
        return row_to_user(dict(row))
