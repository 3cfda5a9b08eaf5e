"""seed_main_categories

Revision ID: 5d82e0b41c6a
Revises: c3f1a9d2e7b4
Create Date: 2026-10-18 10:31:09.552841

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5d82e0b41c6a"
down_revision: Union[str, Sequence[str], None] = "c3f1a9d2e7b4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MAIN_CATEGORIES = [
    ("Politics", "politics"),
    ("Economics", "economics"),
    ("Technology", "technology"),
    ("Celebrities", "celebrities"),
    ("Sports", "sports"),
    ("Health & Wellness", "health-wellness"),
    ("Education", "education"),
    ("Environment & Climate", "environment-climate"),
    ("Social Issues", "social-issues"),
    ("International Affairs", "international-affairs"),
    ("Science & Research", "science-research"),
]


def upgrade() -> None:
    """Seed the main categories that carry badges."""
    categories_table = sa.table(
        "categories",
        sa.column("name", sa.String),
        sa.column("slug", sa.String),
    )

    op.bulk_insert(
        categories_table,
        [{"name": name, "slug": slug} for name, slug in MAIN_CATEGORIES],
    )


def downgrade() -> None:
    """Remove seeded categories."""
    slugs = ", ".join(f"'{slug}'" for _, slug in MAIN_CATEGORIES)
    op.execute(f"DELETE FROM categories WHERE slug IN ({slugs})")
