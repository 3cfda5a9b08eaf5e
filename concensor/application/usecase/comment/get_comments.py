"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from concensor.domain.service import (
    CommentService,
    ReputationService,
    VoteService,
    flatten,
)
from concensor.domain.value import EquippedBadge, PostId, UserId, VoteType


class EquippedBadgeItem(BaseModel):
    """Badge shown next to a comment's author."""

    category_id: str
    category_name: str
    badge_level: int
    badge_name: str
    label: str  # "{category}-{badge}", e.g. "Science-Expert"

    @classmethod
    def from_badge(cls, badge: EquippedBadge) -> "EquippedBadgeItem":
        return cls(
            category_id=str(badge.category_id),
            category_name=badge.category_name,
            badge_level=int(badge.level),
            badge_name=badge.level.label,
            label=badge.label,
        )


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    post_id: str
    author_id: str
    text: str
    parent_id: str | None
    display_number: str  # "B1", "B1-2", ...
    reply_to_number: str | None  # Label of the reply's parent, below top level
    created_at: datetime
    author_vote: VoteType | None  # Author's own sentiment on the post
    equipped_badge: EquippedBadgeItem | None


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase:
    """Use case for getting a post's comments with display numbers."""

    def __init__(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
        reputation_service: ReputationService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote service for the authors' sentiment
            reputation_service: Reputation service for equipped badges
        """
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.reputation_service = reputation_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Comments are returned in thread order: each top-level comment
        followed by its replies, depth first. Each comment carries its
        author's vote on the post and the badge the author has equipped.

        Args:
            request: Get comments request with post ID

        Returns:
            Numbered comments in thread order
        """
        post_id = PostId(UUID(request.post_id))
        nodes = flatten(await self.comment_service.get_numbered_comments(post_id))

        votes = await self.vote_service.get_votes_by_voter(post_id)

        # One badge lookup per distinct author
        badges: dict[UserId, EquippedBadgeItem | None] = {}
        for node in nodes:
            author_id = node.comment.author_id
            if author_id not in badges:
                badge = await self.reputation_service.get_equipped_badge(author_id)
                badges[author_id] = (
                    EquippedBadgeItem.from_badge(badge) if badge else None
                )

        items = [
            CommentItem(
                comment_id=str(node.comment.id),
                post_id=str(node.comment.post_id),
                author_id=str(node.comment.author_id),
                text=node.comment.text,
                parent_id=(
                    str(node.comment.parent_id) if node.comment.parent_id else None
                ),
                display_number=node.display_number,
                reply_to_number=node.reply_to_number,
                created_at=node.comment.created_at,
                author_vote=votes.get(node.comment.author_id),
                equipped_badge=badges[node.comment.author_id],
            )
            for node in nodes
        ]

        return GetCommentsResponse(
            post_id=request.post_id, comments=items, total=len(items)
        )
