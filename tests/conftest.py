"""Test configuration and shared builders."""

import re
from datetime import datetime, timezone
from uuid import uuid4

from concensor.domain.model import Category, Comment, Post, User
from concensor.domain.value import (
    CategoryId,
    CommentId,
    PostId,
    UserId,
    Username,
)

# Fixed instant so hot scores and decay are deterministic
T0 = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_user(username: str = "alice", **overrides) -> User:
    """Build a user with a fresh ID."""
    fields = dict(id=UserId(uuid4()), username=Username(username), created_at=T0)
    fields.update(overrides)
    return User(**fields)


def make_category(
    name: str = "Technology", parent_id: CategoryId | None = None
) -> Category:
    """Build a category; main unless ``parent_id`` is given."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return Category(
        id=CategoryId(uuid4()),
        name=name,
        slug=slug,
        parent_id=parent_id,
        created_at=T0,
    )


def make_post(
    author_id: UserId, category_id: CategoryId, **overrides
) -> Post:
    """Build a published post with zeroed engagement created at T0."""
    fields = dict(
        id=PostId(uuid4()),
        author_id=author_id,
        category_id=category_id,
        title="Should cities ban cars downtown?",
        content="Discuss.",
        created_at=T0,
    )
    fields.update(overrides)
    return Post(**fields)


def make_comment(
    post_id: PostId,
    created_at: datetime,
    parent_id: CommentId | None = None,
    **overrides,
) -> Comment:
    """Build a published comment."""
    fields = dict(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=UserId(uuid4()),
        text="Interesting point.",
        parent_id=parent_id,
        created_at=created_at,
    )
    fields.update(overrides)
    return Comment(**fields)
