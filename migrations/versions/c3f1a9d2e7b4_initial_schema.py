"""initial_schema

Create the schema for the engagement and reputation engine:
- Categories (two-level tree; reputation lives on main categories)
- Users (point totals, peak, equipped badge)
- Posts (five sentiment counters, weighted score, comment count, hot score)
- Votes (one immutable sentiment vote per post and voter)
- Comments (threaded, unbounded depth)
- User category points (per-category points and badge levels)

Revision ID: c3f1a9d2e7b4
Revises:
Create Date: 2026-10-18 10:12:44.318207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "c3f1a9d2e7b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_type AS ENUM (
                'strongly_disagree', 'disagree', 'neutral', 'agree', 'strongly_agree'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE post_status AS ENUM ('published', 'deleted');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_status AS ENUM ('published', 'deleted');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # CATEGORIES table
    # ========================================================================
    op.create_table(
        "categories",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),  # NULL for main categories
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["categories.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("idx_categories_parent_id", "categories", ["parent_id"])

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("peak_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("equipped_badge_category_id", sa.UUID(), nullable=True),
        sa.Column("last_login_date", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["equipped_badge_category_id"], ["categories.id"], ondelete="SET NULL"
        ),
        sa.UniqueConstraint("username"),
        sa.CheckConstraint("total_points >= 0", name="total_points_non_negative"),
        sa.CheckConstraint(
            "peak_points >= total_points", name="peak_points_high_water"
        ),
    )

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "status",
            postgresql.ENUM(name="post_status", create_type=False),
            nullable=False,
            server_default="published",
        ),
        sa.Column(
            "strongly_disagree_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("disagree_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("neutral_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("agree_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "strongly_agree_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("total_votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("weighted_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("hot_score", sa.Float(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"], ondelete="RESTRICT"
        ),
        sa.CheckConstraint(
            "strongly_disagree_count + disagree_count + neutral_count"
            " + agree_count + strongly_agree_count = total_votes",
            name="sentiment_counters_sum",
        ),
        sa.CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
    )
    op.create_index(
        "idx_posts_created_at", "posts", [sa.text("created_at DESC")]
    )
    op.create_index("idx_posts_author_id", "posts", ["author_id"])
    op.create_index(
        "idx_posts_category_status", "posts", ["category_id", "status"]
    )

    # ========================================================================
    # VOTES table (insert-only)
    # ========================================================================
    op.create_table(
        "votes",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column(
            "vote_type",
            postgresql.ENUM(name="vote_type", create_type=False),
            nullable=False,
        ),
        sa.Column("vote_value", sa.SmallInteger(), nullable=False),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voter_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("post_id", "voter_id", name="unique_vote"),
        sa.CheckConstraint("vote_value BETWEEN -2 AND 2", name="vote_value_range"),
    )
    op.create_index("idx_votes_voter_id", "votes", ["voter_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="comment_status", create_type=False),
            nullable=False,
            server_default="published",
        ),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_comments_post_created", "comments", ["post_id", "created_at"]
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # USER_CATEGORY_POINTS table
    # ========================================================================
    op.create_table(
        "user_category_points",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("peak_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "current_badge_level", sa.SmallInteger(), nullable=False, server_default="1"
        ),
        sa.Column(
            "peak_badge_level", sa.SmallInteger(), nullable=False, server_default="1"
        ),
        sa.Column("last_login_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "user_id", "category_id", name="uq_user_category_points"
        ),
        sa.CheckConstraint("points >= 0", name="points_non_negative"),
        sa.CheckConstraint("peak_points >= points", name="category_peak_high_water"),
        sa.CheckConstraint(
            "current_badge_level BETWEEN 1 AND 5", name="current_badge_level_range"
        ),
        sa.CheckConstraint(
            "peak_badge_level >= current_badge_level", name="peak_level_floor"
        ),
    )
    op.create_index(
        "idx_user_category_points_user_points",
        "user_category_points",
        ["user_id", sa.text("points DESC")],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("user_category_points")
    op.drop_table("comments")
    op.drop_table("votes")
    op.drop_table("posts")
    op.drop_table("users")
    op.drop_table("categories")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS comment_status")
    op.execute("DROP TYPE IF EXISTS post_status")
    op.execute("DROP TYPE IF EXISTS vote_type")
