"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional

from sqlalchemy import and_, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from concensor.domain.model import Vote
from concensor.domain.repository import VoteRepository
from concensor.domain.value import PostId, UserId
from concensor.persistence.mappers import row_to_vote, vote_to_dict
from concensor.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_post_and_voter(
        self, post_id: PostId, voter_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a post."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.post_id == post_id,
                votes_table.c.voter_id == voter_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Vote]:
        """Find all votes on a post, oldest first."""
        stmt = (
            select(votes_table)
            .where(votes_table.c.post_id == post_id)
            .order_by(votes_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote; the unique (post_id, voter_id) constraint rejects repeats."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote
