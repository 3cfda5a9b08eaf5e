"""SQLAlchemy table definitions for the engagement engine.

These table definitions are used with manual row mapping.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(30), nullable=False, unique=True),
    Column("total_points", Integer, nullable=False, server_default="0"),
    Column("peak_points", Integer, nullable=False, server_default="0"),
    Column(
        "equipped_badge_category_id",
        UUID,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("last_login_date", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("total_points >= 0", name="total_points_non_negative"),
    CheckConstraint("peak_points >= total_points", name="peak_points_high_water"),
)

# ============================================================================
# CATEGORIES TABLE (two-level tree, read-only for the engine)
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("slug", String(100), nullable=False, unique=True),
    Column(
        "parent_id",
        UUID,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_categories_parent_id", categories_table.c.parent_id)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column(
        "status",
        Enum("published", "deleted", name="post_status", create_type=False),
        nullable=False,
        server_default="published",
    ),
    # Sentiment counters (always sum to total_votes)
    Column("strongly_disagree_count", Integer, nullable=False, server_default="0"),
    Column("disagree_count", Integer, nullable=False, server_default="0"),
    Column("neutral_count", Integer, nullable=False, server_default="0"),
    Column("agree_count", Integer, nullable=False, server_default="0"),
    Column("strongly_agree_count", Integer, nullable=False, server_default="0"),
    Column("total_votes", Integer, nullable=False, server_default="0"),
    Column("weighted_score", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    # Cache of the score at the last recompute
    Column("hot_score", Float, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "strongly_disagree_count + disagree_count + neutral_count"
        " + agree_count + strongly_agree_count = total_votes",
        name="sentiment_counters_sum",
    ),
    CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_category_status", posts_table.c.category_id, posts_table.c.status)

# ============================================================================
# VOTES TABLE (insert-only)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "voter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "vote_type",
        Enum(
            "strongly_disagree",
            "disagree",
            "neutral",
            "agree",
            "strongly_agree",
            name="vote_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("vote_value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "voter_id", name="unique_vote"),
    CheckConstraint("vote_value BETWEEN -2 AND 2", name="vote_value_range"),
)

Index("idx_votes_voter_id", votes_table.c.voter_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("text", Text, nullable=False),
    Column(
        "status",
        Enum("published", "deleted", name="comment_status", create_type=False),
        nullable=False,
        server_default="published",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_comments_post_created", comments_table.c.post_id, comments_table.c.created_at
)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# USER_CATEGORY_POINTS TABLE (one row per user and main category)
# ============================================================================
user_category_points_table = Table(
    "user_category_points",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("points", Integer, nullable=False, server_default="0"),
    Column("peak_points", Integer, nullable=False, server_default="0"),
    Column("current_badge_level", SmallInteger, nullable=False, server_default="1"),
    Column("peak_badge_level", SmallInteger, nullable=False, server_default="1"),
    Column("last_login_date", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("user_id", "category_id", name="uq_user_category_points"),
    CheckConstraint("points >= 0", name="points_non_negative"),
    CheckConstraint("peak_points >= points", name="category_peak_high_water"),
    CheckConstraint(
        "current_badge_level BETWEEN 1 AND 5", name="current_badge_level_range"
    ),
    CheckConstraint("peak_badge_level >= current_badge_level", name="peak_level_floor"),
)

Index(
    "idx_user_category_points_user_points",
    user_category_points_table.c.user_id,
    user_category_points_table.c.points.desc(),
)
