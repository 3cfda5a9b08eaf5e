"""Display numbering for a post's comment forest.

Top-level comments are labelled ``B1``, ``B2``, ... in creation order. Every
descendant of a top-level comment, at any depth, is labelled
``{base}-1``, ``{base}-2``, ... in creation order, so nesting depth does not
affect numbering. A reply to another reply also records the label of the
comment it answers in ``reply_to_number``.

Labels are recomputed on every read and never stored. Because creation time
only grows, new comments never renumber existing ones within a thread.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from concensor.domain.model.comment import Comment
from concensor.domain.value import CommentId


@dataclass
class NumberedComment:
    """A comment with its display label and nested replies."""

    comment: Comment
    display_number: str
    reply_to_number: Optional[str] = None
    replies: list["NumberedComment"] = field(default_factory=list)


def _creation_key(comment: Comment) -> tuple:
    return (comment.created_at, str(comment.id))


def number_comments(comments: Iterable[Comment]) -> list[NumberedComment]:
    """Assign display labels to a post's comments.

    Args:
        comments: Flat collection of one post's comments

    Returns:
        Top-level comments in creation order, each with its replies nested
        beneath it in creation order
    """
    by_id: dict[CommentId, Comment] = {c.id: c for c in comments}

    children: dict[CommentId, list[CommentId]] = defaultdict(list)
    roots: list[Comment] = []
    for comment in by_id.values():
        if comment.is_top_level:
            roots.append(comment)
        elif comment.parent_id in by_id and comment.parent_id != comment.id:
            children[comment.parent_id].append(comment.id)
        # Replies whose parent is absent are orphans and are skipped

    roots.sort(key=_creation_key)

    numbered_roots: list[NumberedComment] = []
    for index, root in enumerate(roots, start=1):
        base = f"B{index}"
        root_node = NumberedComment(comment=root, display_number=base)

        # Collect every descendant with an explicit stack over the parent index
        descendants: list[Comment] = []
        stack = list(children.get(root.id, []))
        visited: set[CommentId] = {root.id}
        while stack:
            comment_id = stack.pop()
            if comment_id in visited:
                continue
            visited.add(comment_id)
            descendants.append(by_id[comment_id])
            stack.extend(children.get(comment_id, []))

        descendants.sort(key=_creation_key)

        nodes: dict[CommentId, NumberedComment] = {root.id: root_node}
        for k, reply in enumerate(descendants, start=1):
            nodes[reply.id] = NumberedComment(
                comment=reply, display_number=f"{base}-{k}"
            )

        # Parents precede children in creation order, but attach in a
        # second pass so out-of-order timestamps cannot drop a reply
        for reply in descendants:
            node = nodes[reply.id]
            parent_node = nodes[reply.parent_id]  # type: ignore[index]
            if reply.parent_id != root.id:
                node.reply_to_number = parent_node.display_number
            parent_node.replies.append(node)

        numbered_roots.append(root_node)

    return numbered_roots


def flatten(numbered: Iterable[NumberedComment]) -> list[NumberedComment]:
    """Pre-order flattening of a numbered forest."""
    result: list[NumberedComment] = []
    stack = list(reversed(list(numbered)))
    while stack:
        node = stack.pop()
        result.append(node)
        stack.extend(reversed(node.replies))
    return result
