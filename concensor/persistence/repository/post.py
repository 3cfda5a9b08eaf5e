"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from concensor.domain.error import NotFoundError
from concensor.domain.model import Post
from concensor.domain.model.post import COUNTER_FIELDS
from concensor.domain.repository.post import PostRepository
from concensor.domain.value import CategoryId, PostId, PostStatus, VoteType
from concensor.persistence.mappers import post_to_dict, row_to_post
from concensor.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def find_by_id_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID and take a row lock (SELECT ... FOR UPDATE)."""
        with logfire.span(
            "post_repository.find_by_id_for_update", post_id=str(post_id)
        ):
            stmt = (
                select(posts_table)
                .where(posts_table.c.id == post_id)
                .with_for_update()
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_published(
        self, category_id: Optional[CategoryId] = None
    ) -> List[Post]:
        """Find all published posts, optionally within one category."""
        with logfire.span(
            "post_repository.find_published",
            category_id=str(category_id) if category_id else None,
        ):
            stmt = select(posts_table).where(
                posts_table.c.status == PostStatus.PUBLISHED.value
            )
            if category_id:
                stmt = stmt.where(posts_table.c.category_id == category_id)

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found published posts", count=len(posts))
            return posts

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            existing = await self.find_by_id(post.id)
            post_dict = post_to_dict(post)

            if existing:
                logfire.info("Updating existing post", post_id=str(post.id))
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                logfire.info("Inserting new post", post_id=str(post.id))
                stmt = posts_table.insert().values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def apply_vote(
        self, post_id: PostId, vote_type: VoteType, vote_value: int
    ) -> Post:
        """Atomically count one vote with a SQL-level increment."""
        counter = posts_table.c[COUNTER_FIELDS[vote_type]]
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(
                {
                    counter: counter + 1,
                    posts_table.c.total_votes: posts_table.c.total_votes + 1,
                    posts_table.c.weighted_score: (
                        posts_table.c.weighted_score + vote_value
                    ),
                }
            )
            .returning(posts_table)
        )
        return await self._execute_returning(stmt, post_id)

    async def increment_comment_count(self, post_id: PostId) -> Post:
        """Atomically increment comment count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=posts_table.c.comment_count + 1)
            .returning(posts_table)
        )
        return await self._execute_returning(stmt, post_id)

    async def update_hot_score(self, post_id: PostId, hot_score: float) -> Post:
        """Store a freshly computed hot score."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(hot_score=hot_score)
            .returning(posts_table)
        )
        return await self._execute_returning(stmt, post_id)

    async def _execute_returning(self, stmt, post_id: PostId) -> Post:
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise NotFoundError("Post", str(post_id))
        await self.session.flush()
        return row_to_post(row._asdict())
